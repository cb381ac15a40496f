"""Selectable serving sizes for a validated product."""

from nutrition_normalizer.domain.nutrition import ServingOption, ServingSizeInfo
from nutrition_normalizer.services.numbers import round_tenth

HOUSEHOLD_MEASURES: tuple[tuple[str, float], ...] = (
    ("1 tsp (4g)", 4),
    ("1 tbsp (12g)", 12),
    ("¼ cup (60g)", 60),
    ("1 cup (240g)", 240),
)
_REFERENCE_GRAMS = 100


def get_serving_size_options(
    serving_info: ServingSizeInfo, product_name: str | None = None
) -> list[ServingOption]:
    """Build serving options: the product serving, household measures and 100g.

    Options are unique by weight rounded half up to one decimal, the first
    one added wins. Defaults sort first, the rest by ascending weight.
    """
    options: list[ServingOption] = []
    used_grams: set[float] = set()

    def add_option(label: str, grams: float, is_default: bool) -> None:
        rounded = round_tenth(grams)
        if rounded in used_grams:
            return
        used_grams.add(rounded)
        options.append(ServingOption(label=label, grams=rounded, is_default=is_default))

    product_grams = serving_info.grams
    if product_grams and product_grams != _REFERENCE_GRAMS:
        add_option(serving_info.display_label, product_grams, True)

    for label, grams in HOUSEHOLD_MEASURES:
        add_option(label, grams, False)

    add_option(
        f"{_REFERENCE_GRAMS}g",
        _REFERENCE_GRAMS,
        not product_grams or product_grams == _REFERENCE_GRAMS,
    )

    options.sort(key=lambda option: (not option.is_default, option.grams))
    return options
