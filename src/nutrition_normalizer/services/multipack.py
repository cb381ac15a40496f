"""Multi-pack product detection."""

from nutrition_normalizer.config import DEFAULT_RULES, ServingRules


def is_multi_pack_product(
    name: str | None, rules: ServingRules = DEFAULT_RULES
) -> bool:
    """Return True when the product name describes multi-unit packaging."""
    if not name:
        return False
    lowered = name.lower()
    return any(keyword in lowered for keyword in rules.multi_pack_keywords)
