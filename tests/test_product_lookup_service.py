"""Tests for the product lookup service."""

import asyncio
from dataclasses import dataclass

import httpx
import pytest

from nutrition_normalizer.adapters.openfoodfacts_client import HttpxOpenFoodFactsClient
from nutrition_normalizer.services.products import (
    ProductLookupError,
    ProductLookupService,
    ProductNotFoundError,
)
from tests.conftest import KCUP_BARCODE, FakeOpenFoodFactsClient


def _status_error(status_code: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://off.test/api/v0/product/1.json")
    response = httpx.Response(status_code, request=request)
    return httpx.HTTPStatusError("upstream error", request=request, response=response)


def test_lookup_returns_normalized_product() -> None:
    service = ProductLookupService(FakeOpenFoodFactsClient(), retry_delay_seconds=0)

    result = asyncio.run(service.lookup(KCUP_BARCODE))

    assert result.barcode == KCUP_BARCODE
    assert result.product_name == "Laura Secord Hot Chocolate K-Cups"
    assert result.brand_name == "Laura Secord"
    assert result.image_url == "https://images.test/kcup.jpg"
    assert result.nutrition.serving_info.grams == 15
    assert result.serving_options[0].grams == 15
    assert result.serving_options[0].is_default


def test_lookup_defaults_missing_name() -> None:
    client = FakeOpenFoodFactsClient(
        products={"42": {"nutriments": {"energy-kcal_100g": 100}}}
    )
    service = ProductLookupService(client, retry_delay_seconds=0)

    result = asyncio.run(service.lookup("42"))

    assert result.product_name == "Unknown Product"
    assert result.nutrition.serving_info.display_label == "100g"


def test_unknown_barcode_raises_not_found() -> None:
    service = ProductLookupService(FakeOpenFoodFactsClient(), retry_delay_seconds=0)

    with pytest.raises(ProductNotFoundError):
        asyncio.run(service.lookup("0000"))


def test_http_404_raises_not_found_without_retry() -> None:
    client = FakeOpenFoodFactsClient(failures=[_status_error(404)])
    service = ProductLookupService(client, retry_delay_seconds=0)

    with pytest.raises(ProductNotFoundError):
        asyncio.run(service.lookup(KCUP_BARCODE))
    assert client.calls == 1


def test_transient_failure_is_retried() -> None:
    client = FakeOpenFoodFactsClient(failures=[httpx.ConnectError("boom")])
    service = ProductLookupService(client, retry_delay_seconds=0)

    result = asyncio.run(service.lookup(KCUP_BARCODE))

    assert client.calls == 2
    assert result.nutrition.serving_info.was_corrected


def test_persistent_failure_raises_lookup_error() -> None:
    client = FakeOpenFoodFactsClient(failures=[_status_error(503), _status_error(503)])
    service = ProductLookupService(client, retry_delay_seconds=0)

    with pytest.raises(ProductLookupError) as excinfo:
        asyncio.run(service.lookup(KCUP_BARCODE))

    assert not isinstance(excinfo.value, ProductNotFoundError)
    assert client.calls == 2


def test_serializes_product_with_wire_names() -> None:
    service = ProductLookupService(FakeOpenFoodFactsClient(), retry_delay_seconds=0)

    data = asyncio.run(service.lookup(KCUP_BARCODE)).to_dict()

    assert data["productName"] == "Laura Secord Hot Chocolate K-Cups"
    assert data["servingInfo"]["grams"] == 15
    assert data["isServingDataTrusted"] is False
    assert data["servingOptions"][0]["isDefault"] is True


@dataclass
class ListBodyClient(FakeOpenFoodFactsClient):
    async def get_product(self, barcode: str) -> dict[str, object]:
        self.calls += 1
        return ["not", "an", "object"]  # type: ignore[return-value]


def test_non_object_response_raises_lookup_error() -> None:
    service = ProductLookupService(ListBodyClient(), retry_delay_seconds=0)

    with pytest.raises(ProductLookupError) as excinfo:
        asyncio.run(service.lookup(KCUP_BARCODE))

    assert not isinstance(excinfo.value, ProductNotFoundError)


def test_non_json_response_raises_lookup_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>maintenance</html>")

    client = HttpxOpenFoodFactsClient(
        base_url="https://off.test/api/v0",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )
    service = ProductLookupService(client, retry_delay_seconds=0)

    with pytest.raises(ProductLookupError) as excinfo:
        asyncio.run(service.lookup(KCUP_BARCODE))

    assert not isinstance(excinfo.value, ProductNotFoundError)
