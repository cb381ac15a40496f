"""Nutrition domain models."""

from dataclasses import dataclass

_NUTRIENT_FIELDS = ("calories", "protein", "carbs", "fat", "fiber", "sugar", "sodium")


@dataclass(frozen=True)
class NutrientSet:
    """Nutrient values for one reference amount.

    ``None`` means the value was not reported upstream. Calories are kcal,
    sodium is milligrams and every other nutrient is grams.
    """

    calories: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None
    fiber: float | None = None
    sugar: float | None = None
    sodium: float | None = None

    def to_dict(self) -> dict[str, float]:
        """Serialize reported nutrients, omitting absent ones."""
        return {
            name: value
            for name in _NUTRIENT_FIELDS
            if (value := getattr(self, name)) is not None
        }


@dataclass(frozen=True)
class ServingSizeInfo:
    """Serving size chosen for display, with any correction explanation."""

    display_label: str
    grams: float | None
    was_corrected: bool = False
    correction_reason: str | None = None

    def to_dict(self) -> dict[str, object]:
        """Serialize using the mobile client's field names."""
        data: dict[str, object] = {
            "displayLabel": self.display_label,
            "grams": self.grams,
            "wasCorrected": self.was_corrected,
        }
        if self.correction_reason is not None:
            data["correctionReason"] = self.correction_reason
        return data


@dataclass(frozen=True)
class ValidatedNutrition:
    """Normalized nutrition result for a product."""

    per_serving: NutrientSet
    per_100g: NutrientSet
    serving_info: ServingSizeInfo
    is_serving_data_trusted: bool

    def to_dict(self) -> dict[str, object]:
        """Serialize using the mobile client's field names."""
        return {
            "perServing": self.per_serving.to_dict(),
            "per100g": self.per_100g.to_dict(),
            "servingInfo": self.serving_info.to_dict(),
            "isServingDataTrusted": self.is_serving_data_trusted,
        }


@dataclass(frozen=True)
class PlausibilityResult:
    """Outcome of the per-serving plausibility heuristics."""

    is_plausible: bool
    reason: str | None = None


@dataclass(frozen=True)
class ServingOption:
    """Selectable serving size."""

    label: str
    grams: float
    is_default: bool

    def to_dict(self) -> dict[str, object]:
        return {"label": self.label, "grams": self.grams, "isDefault": self.is_default}
