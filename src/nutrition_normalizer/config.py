"""Application configuration."""

import os
from dataclasses import dataclass

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


@dataclass(frozen=True)
class ServingRules:
    """Thresholds and keyword lists used by the serving size engine."""

    max_serving_calories: float = 800
    max_serving_grams: float = 500
    max_calorie_ratio: float = 3.0
    target_serving_calories: float = 150
    min_estimated_grams: float = 10
    max_estimated_grams: float = 200
    default_serving_grams: float = 30
    pod_serving_grams: float = 15
    bar_serving_grams: float = 40
    packet_serving_grams: float = 28
    multi_pack_keywords: tuple[str, ...] = (
        "pods",
        "pod",
        "k-cup",
        "kcup",
        "k cup",
        "capsule",
        "capsules",
        "pack",
        "count",
        "ct",
        "single serve",
        "variety",
        "box of",
        "sachets",
        "packets",
        "pouches",
        "bars",
        "snack packs",
    )
    pod_keywords: tuple[str, ...] = (
        "pod",
        "k-cup",
        "kcup",
        "k cup",
        "capsule",
        "single serve",
    )
    bar_keywords: tuple[str, ...] = ("bar",)
    packet_keywords: tuple[str, ...] = ("packet", "sachet", "pouch")


DEFAULT_RULES = ServingRules()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    off_base_url: str = "https://world.openfoodfacts.org/api/v0"
    off_user_agent: str = "nutrition-normalizer/0.1 (+https://world.openfoodfacts.org)"
    off_timeout_seconds: float = 8.0
    environment: str = _ENVIRONMENT
    debug: bool = False
    max_serving_calories: float = DEFAULT_RULES.max_serving_calories
    max_serving_grams: float = DEFAULT_RULES.max_serving_grams
    max_calorie_ratio: float = DEFAULT_RULES.max_calorie_ratio
    target_serving_calories: float = DEFAULT_RULES.target_serving_calories

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def serving_rules(self) -> ServingRules:
        """Build engine rules with any overridden thresholds applied."""
        return ServingRules(
            max_serving_calories=self.max_serving_calories,
            max_serving_grams=self.max_serving_grams,
            max_calorie_ratio=self.max_calorie_ratio,
            target_serving_calories=self.target_serving_calories,
        )
