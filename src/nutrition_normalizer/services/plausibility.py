"""Plausibility checks for upstream per-serving nutrition."""

from nutrition_normalizer.config import DEFAULT_RULES, ServingRules
from nutrition_normalizer.domain.nutrition import PlausibilityResult
from nutrition_normalizer.services.multipack import is_multi_pack_product
from nutrition_normalizer.services.numbers import format_grams, round_half_up


def check_serving_plausibility(
    calories_per_serving: float | None,
    calories_per_100g: float | None,
    serving_grams: float | None,
    product_name: str | None,
    rules: ServingRules = DEFAULT_RULES,
) -> PlausibilityResult:
    """Decide whether a per-serving calorie figure is credible for one serving.

    Checks run in order and the first failure wins:

    1. calories per serving above ``rules.max_serving_calories``;
    2. serving weight above ``rules.max_serving_grams``;
    3. a per-serving to per-100g calorie ratio above
       ``rules.max_calorie_ratio`` on a product named like a multi-pack.

    Missing per-serving calories leave nothing to invalidate, so the result
    is plausible.
    """
    if calories_per_serving is None:
        return PlausibilityResult(is_plausible=True)

    if calories_per_serving > rules.max_serving_calories:
        return PlausibilityResult(
            is_plausible=False,
            reason=(
                f"{round_half_up(calories_per_serving)} cal per serving seems too "
                "high. This may be the total for the entire package."
            ),
        )

    if serving_grams is not None and serving_grams > rules.max_serving_grams:
        return PlausibilityResult(
            is_plausible=False,
            reason=(
                f"Serving size of {format_grams(serving_grams)}g is unusually "
                "large. This may be the full package weight."
            ),
        )

    if (
        calories_per_100g is not None
        and calories_per_100g > 0
        and serving_grams is not None
    ):
        ratio = calories_per_serving / calories_per_100g
        if ratio > rules.max_calorie_ratio and is_multi_pack_product(
            product_name, rules
        ):
            return PlausibilityResult(
                is_plausible=False,
                reason=(
                    "This appears to be a multi-pack product. Showing nutrition "
                    "per individual serving instead of the full box."
                ),
            )

    return PlausibilityResult(is_plausible=True)
