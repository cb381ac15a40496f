"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status

from nutrition_normalizer.api.models import NormalizeRequest, ScaleRequest
from nutrition_normalizer.app_logging import configure_logging
from nutrition_normalizer.containers import AppContainer
from nutrition_normalizer.services.normalizer import validate_and_normalize_nutrition
from nutrition_normalizer.services.products import (
    ProductLookupError,
    ProductNotFoundError,
)
from nutrition_normalizer.services.scaling import nutrition_for_quantity
from nutrition_normalizer.services.serving_options import get_serving_size_options


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(logging.DEBUG if container.settings.debug else logging.INFO)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/products/{barcode}/nutrition")
    async def product_nutrition(barcode: str, request: Request) -> dict[str, object]:
        """Fetch a product by barcode and return normalized nutrition."""
        state_container: AppContainer = request.app.state.container
        try:
            result = await state_container.product_lookup_service.lookup(barcode)
        except ProductNotFoundError as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            ) from exc
        except ProductLookupError as exc:
            logger.exception("Product lookup failed: barcode=%s", barcode)
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Product database unavailable",
            ) from exc
        return result.to_dict()

    @app.post("/nutrition/normalize")
    async def normalize(
        payload: NormalizeRequest, request: Request
    ) -> dict[str, object]:
        """Normalize an already-fetched upstream product record."""
        state_container: AppContainer = request.app.state.container
        nutrition = validate_and_normalize_nutrition(
            payload.product, payload.barcode, state_container.serving_rules
        )
        options = get_serving_size_options(
            nutrition.serving_info, str(payload.product.get("product_name") or "")
        )
        return {
            **nutrition.to_dict(),
            "servingOptions": [option.to_dict() for option in options],
        }

    @app.post("/nutrition/scale")
    async def scale(payload: ScaleRequest) -> dict[str, object]:
        """Scale per-100g nutrition to a user-selected quantity."""
        scaled = nutrition_for_quantity(
            payload.per_100g.to_nutrient_set(), payload.grams, payload.servings
        )
        return {"nutrition": scaled.to_dict()}

    return app
