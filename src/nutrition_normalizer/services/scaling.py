"""Linear nutrient scaling."""

from nutrition_normalizer.domain.nutrition import NutrientSet


def scale_nutrition(base: NutrientSet, factor: float) -> NutrientSet:
    """Multiply every reported nutrient by ``factor``; absent ones stay absent."""

    def scale(value: float | None) -> float | None:
        return value * factor if value is not None else None

    return NutrientSet(
        calories=scale(base.calories),
        protein=scale(base.protein),
        carbs=scale(base.carbs),
        fat=scale(base.fat),
        fiber=scale(base.fiber),
        sugar=scale(base.sugar),
        sodium=scale(base.sodium),
    )


def nutrition_for_quantity(
    per_100g: NutrientSet, grams: float, servings: float = 1.0
) -> NutrientSet:
    """Nutrition for ``servings`` portions of ``grams`` each."""
    return scale_nutrition(per_100g, grams * servings / 100)
