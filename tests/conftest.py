"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from nutrition_normalizer.adapters.openfoodfacts_client import OpenFoodFactsClient
from nutrition_normalizer.config import Settings
from nutrition_normalizer.containers import AppContainer
from nutrition_normalizer.services.products import ProductLookupService

KCUP_BARCODE = "0663447217174"


def kcup_product() -> dict[str, object]:
    """Whole-box serving data as recorded upstream for a box of K-Cups."""
    return {
        "product_name": "Laura Secord Hot Chocolate K-Cups",
        "brands": "Laura Secord",
        "serving_size": "236.0g",
        "serving_quantity": "236",
        "image_front_url": "https://images.test/kcup.jpg",
        "nutriments": {
            "energy-kcal_100g": 400,
            "energy-kcal_serving": 944,
            "proteins_100g": 8.47,
            "proteins_serving": 20,
            "carbohydrates_100g": 72.03,
            "carbohydrates_serving": 170,
            "fat_100g": 8.47,
            "fat_serving": 20,
            "sugars_100g": 59.32,
            "sugars_serving": 140,
            "fiber_100g": 4.2,
            "fiber_serving": 10,
            "sodium_100g": 0.508,
            "sodium_serving": 1.2,
        },
    }


@dataclass
class FakeOpenFoodFactsClient(OpenFoodFactsClient):
    """Fake Open Food Facts client with in-memory products."""

    products: dict[str, dict[str, object]] = field(
        default_factory=lambda: {KCUP_BARCODE: kcup_product()}
    )
    failures: list[Exception] = field(default_factory=list)
    calls: int = 0

    async def get_product(self, barcode: str) -> dict[str, object]:
        self.calls += 1
        if self.failures:
            raise self.failures.pop(0)
        product = self.products.get(barcode)
        if product is None:
            return {"status": 0, "status_verbose": "product not found"}
        return {"status": 1, "code": barcode, "product": product}


@pytest.fixture
def settings() -> Settings:
    return Settings(off_base_url="https://off.test/api/v0")


@pytest.fixture
def off_client() -> FakeOpenFoodFactsClient:
    return FakeOpenFoodFactsClient()


@pytest.fixture
def container(settings: Settings, off_client: FakeOpenFoodFactsClient) -> AppContainer:
    serving_rules = settings.serving_rules()
    product_lookup_service = ProductLookupService(
        client=off_client,
        rules=serving_rules,
        retry_delay_seconds=0,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        serving_rules=serving_rules,
        product_lookup_service=product_lookup_service,
        close_resources=close_resources,
    )
