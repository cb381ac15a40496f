"""Product lookup service integrating Open Food Facts."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import httpx

from nutrition_normalizer.adapters.openfoodfacts_client import OpenFoodFactsClient
from nutrition_normalizer.config import DEFAULT_RULES, ServingRules
from nutrition_normalizer.domain.nutrition import ServingOption, ValidatedNutrition
from nutrition_normalizer.domain.products import OffProduct
from nutrition_normalizer.services.normalizer import validate_and_normalize_nutrition
from nutrition_normalizer.services.serving_options import get_serving_size_options

_UNKNOWN_PRODUCT = "Unknown Product"
_HTTP_NOT_FOUND = 404

_logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


class ProductLookupError(Exception):
    """Raised when a product cannot be retrieved from upstream."""


class ProductNotFoundError(ProductLookupError):
    """Raised when upstream has no product for a barcode."""

    def __init__(self, barcode: str) -> None:
        super().__init__(f"Product not found: {barcode}")
        self.barcode = barcode


@dataclass(frozen=True)
class ProductNutrition:
    """Product details with normalized nutrition and serving options."""

    barcode: str
    product_name: str
    brand_name: str | None
    image_url: str | None
    nutrition: ValidatedNutrition
    serving_options: list[ServingOption] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        """Serialize using the mobile client's field names."""
        return {
            "barcode": self.barcode,
            "productName": self.product_name,
            "brandName": self.brand_name,
            "imageUrl": self.image_url,
            **self.nutrition.to_dict(),
            "servingOptions": [option.to_dict() for option in self.serving_options],
        }


@dataclass
class ProductLookupService:
    """Fetches products by barcode and normalizes their nutrition."""

    client: OpenFoodFactsClient
    rules: ServingRules = DEFAULT_RULES
    debug: bool = False
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def lookup(self, barcode: str) -> ProductNutrition:
        """Fetch a product and return its normalized nutrition."""
        try:
            payload = await self._call_with_retry(
                lambda: self.client.get_product(barcode),
                action=f"get_product:{barcode}",
            )
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == _HTTP_NOT_FOUND:
                raise ProductNotFoundError(barcode) from exc
            raise ProductLookupError(f"Upstream error for {barcode}: {exc}") from exc
        except httpx.HTTPError as exc:
            raise ProductLookupError(f"Upstream error for {barcode}: {exc}") from exc
        except ValueError as exc:
            raise ProductLookupError(f"Malformed response for {barcode}") from exc
        if not isinstance(payload, dict):
            raise ProductLookupError(f"Malformed response for {barcode}")
        raw_product = payload.get("product")
        if payload.get("status") != 1 or not isinstance(raw_product, dict):
            raise ProductNotFoundError(barcode)

        product = OffProduct.model_validate(raw_product)
        nutrition = validate_and_normalize_nutrition(product, barcode, self.rules)
        if self.debug:
            _logger.info(
                "Product lookup OFF: barcode=%s trusted=%s corrected=%s",
                barcode,
                nutrition.is_serving_data_trusted,
                nutrition.serving_info.was_corrected,
            )
        return ProductNutrition(
            barcode=barcode,
            product_name=product.product_name or _UNKNOWN_PRODUCT,
            brand_name=product.brands,
            image_url=product.display_image_url,
            nutrition=nutrition,
            serving_options=get_serving_size_options(
                nutrition.serving_info, product.product_name
            ),
        )

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[dict[str, object]]]", *, action: str
    ) -> dict[str, object]:
        """Call an async function with a short retry."""
        attempt = 0
        while True:
            try:
                return await func()
            except httpx.HTTPError as exc:
                status_code = _status_code_from_exception(exc)
                if status_code == str(_HTTP_NOT_FOUND):
                    raise
                attempt += 1
                if self.debug or attempt > self.retry_attempts:
                    _logger.warning(
                        "Product %s failed (attempt %s/%s, status=%s): %s",
                        action,
                        attempt,
                        self.retry_attempts + 1,
                        status_code,
                        exc,
                    )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"
