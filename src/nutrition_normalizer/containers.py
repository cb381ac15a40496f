"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from nutrition_normalizer.adapters.openfoodfacts_client import HttpxOpenFoodFactsClient
from nutrition_normalizer.config import ServingRules, Settings
from nutrition_normalizer.services.products import ProductLookupService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    serving_rules: ServingRules
    product_lookup_service: ProductLookupService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    serving_rules = resolved_settings.serving_rules()
    off_client = HttpxOpenFoodFactsClient.create(
        base_url=resolved_settings.off_base_url,
        user_agent=resolved_settings.off_user_agent,
        timeout_seconds=resolved_settings.off_timeout_seconds,
    )
    product_lookup_service = ProductLookupService(
        client=off_client,
        rules=serving_rules,
        debug=resolved_settings.debug,
    )

    async def close_resources() -> None:
        await off_client.close()

    return AppContainer(
        settings=resolved_settings,
        serving_rules=serving_rules,
        product_lookup_service=product_lookup_service,
        close_resources=close_resources,
    )
