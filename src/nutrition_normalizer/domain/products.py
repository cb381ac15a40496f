"""Pydantic models for Open Food Facts product payloads."""

import math
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _coerce_number(value: object) -> float | None:
    """Return a finite float, or None when the value is missing or malformed."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not isinstance(value, (int, float)):
        return None
    number = float(value)
    if not math.isfinite(number):
        return None
    return number


_LEADING_NUMBER = re.compile(r"^\s*([-+]?\d+\.?\d*)")


def _leading_number(value: object) -> float | None:
    """Read a quantity such as ``"30 g"`` by its leading number."""
    number = _coerce_number(value)
    if number is not None or not isinstance(value, str):
        return number
    match = _LEADING_NUMBER.match(value)
    if match is None:
        return None
    return float(match.group(1))


class OffNutriments(BaseModel):
    """Recognized nutriment keys; per-100g and per-serving figures."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    energy_kcal_100g: float | None = Field(default=None, alias="energy-kcal_100g")
    energy_100g: float | None = None
    energy_value: float | None = None
    energy_kcal_serving: float | None = Field(
        default=None, alias="energy-kcal_serving"
    )
    energy_serving: float | None = None
    proteins_100g: float | None = None
    proteins_serving: float | None = None
    carbohydrates_100g: float | None = None
    carbohydrates_serving: float | None = None
    fat_100g: float | None = None
    fat_serving: float | None = None
    fiber_100g: float | None = None
    fiber_serving: float | None = None
    sugars_100g: float | None = None
    sugars_serving: float | None = None
    sodium_100g: float | None = None
    sodium_serving: float | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _lenient_number(cls, value: object) -> float | None:
        return _coerce_number(value)


class OffProduct(BaseModel):
    """Open Food Facts product payload."""

    model_config = ConfigDict(extra="ignore")

    product_name: str | None = None
    brands: str | None = None
    serving_size: str | None = None
    serving_quantity: float | None = None
    quantity: str | None = None
    image_url: str | None = None
    image_front_url: str | None = None
    nutriments: OffNutriments = Field(default_factory=OffNutriments)

    @field_validator("serving_quantity", mode="before")
    @classmethod
    def _positive_quantity(cls, value: object) -> float | None:
        number = _leading_number(value)
        if number is None or number <= 0:
            return None
        return number

    @field_validator(
        "product_name",
        "brands",
        "serving_size",
        "quantity",
        "image_url",
        "image_front_url",
        mode="before",
    )
    @classmethod
    def _text_or_none(cls, value: object) -> str | None:
        if value is None:
            return None
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        if isinstance(value, str):
            return value
        return None

    @field_validator("nutriments", mode="before")
    @classmethod
    def _nutriments_mapping(cls, value: object) -> object:
        if value is None or not isinstance(value, (dict, OffNutriments)):
            return {}
        return value

    @property
    def display_image_url(self) -> str | None:
        """Return the best available product image."""
        return self.image_url or self.image_front_url
