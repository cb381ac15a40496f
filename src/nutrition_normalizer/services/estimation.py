"""Single-serving weight estimation."""

from nutrition_normalizer.config import DEFAULT_RULES, ServingRules
from nutrition_normalizer.services.numbers import round_half_up


def estimate_reasonable_serving_grams(
    product_name: str | None,
    calories_per_100g: float | None = None,
    rules: ServingRules = DEFAULT_RULES,
) -> float:
    """Estimate a plausible single-serving weight in grams.

    Category keywords in the product name win (pods, bars, packets). Without
    one, the weight that gives ``rules.target_serving_calories`` is used,
    clamped to the configured bounds. With no calorie data either, the
    generic default applies.
    """
    lowered = (product_name or "").lower()

    if _contains_any(lowered, rules.pod_keywords):
        return rules.pod_serving_grams
    if _contains_any(lowered, rules.bar_keywords):
        return rules.bar_serving_grams
    if _contains_any(lowered, rules.packet_keywords):
        return rules.packet_serving_grams

    if calories_per_100g is not None and calories_per_100g > 0:
        grams = rules.target_serving_calories / calories_per_100g * 100
        estimated = round_half_up(grams)
        return float(
            max(rules.min_estimated_grams, min(rules.max_estimated_grams, estimated))
        )

    return rules.default_serving_grams


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)
