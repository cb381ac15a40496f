"""Pydantic models for API request payloads."""

from pydantic import BaseModel, Field

from nutrition_normalizer.domain.nutrition import NutrientSet


class NormalizeRequest(BaseModel):
    """Raw upstream product to normalize."""

    barcode: str = ""
    product: dict[str, object] = Field(default_factory=dict)


class NutrientPayload(BaseModel):
    """Nutrient values in wire form."""

    calories: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None
    fiber: float | None = None
    sugar: float | None = None
    sodium: float | None = None

    def to_nutrient_set(self) -> NutrientSet:
        return NutrientSet(**self.model_dump())


class ScaleRequest(BaseModel):
    """User-selected quantity of a product."""

    per_100g: NutrientPayload = Field(alias="per100g")
    grams: float = Field(gt=0)
    servings: float = Field(default=1.0, gt=0)
