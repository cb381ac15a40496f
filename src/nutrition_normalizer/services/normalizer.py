"""Serving size validation and normalization for Open Food Facts products.

Upstream serving sizes are unreliable: a box of coffee pods is often recorded
with the whole box weight as its serving, which overstates calories per
serving many times over. Per-100g figures are treated as the source of truth.
Per-serving figures are used only when they pass the plausibility checks;
otherwise they are rebuilt from per-100g data and an estimated serving weight.
"""

import logging
from collections.abc import Mapping

from nutrition_normalizer.config import DEFAULT_RULES, ServingRules
from nutrition_normalizer.domain.nutrition import (
    NutrientSet,
    ServingSizeInfo,
    ValidatedNutrition,
)
from nutrition_normalizer.domain.products import OffNutriments, OffProduct
from nutrition_normalizer.services.estimation import estimate_reasonable_serving_grams
from nutrition_normalizer.services.numbers import format_grams, round_half_up
from nutrition_normalizer.services.plausibility import check_serving_plausibility
from nutrition_normalizer.services.scaling import scale_nutrition
from nutrition_normalizer.services.serving_text import parse_serving_grams

KJ_PER_KCAL = 4.184
_MG_PER_G = 1000
_DEFAULT_SERVING_LABEL = "1 serving"
_WHOLE_PACKAGE_REASON = "Original serving size appeared to be the full package weight."

_logger = logging.getLogger(__name__)


def resolve_energy_kcal(
    kcal: float | None,
    kilojoules: float | None,
    unlabeled: float | None = None,
) -> float | None:
    """Pick the first available energy figure, in kcal.

    Priority: an explicit kcal value, then kilojoules converted to kcal and
    rounded, then an unlabeled energy value assumed to be kcal.
    """
    converted = (
        round_half_up(kilojoules / KJ_PER_KCAL) if kilojoules is not None else None
    )
    for candidate in (kcal, converted, unlabeled):
        if candidate is not None:
            return float(candidate)
    return None


def validate_and_normalize_nutrition(
    product: OffProduct | Mapping[str, object],
    barcode: str,
    rules: ServingRules = DEFAULT_RULES,
) -> ValidatedNutrition:
    """Produce plausible per-serving nutrition for an upstream product record."""
    if not isinstance(product, OffProduct):
        product = OffProduct.model_validate(product)
    nutriments = product.nutriments
    product_name = product.product_name or ""

    per_100g = _per_100g(nutriments)
    raw_serving_size = product.serving_size or product.quantity or ""
    serving_grams = _serving_grams(raw_serving_size, product.serving_quantity)
    existing_per_serving = _per_serving(nutriments)
    has_existing_serving_data = existing_per_serving.calories is not None

    plausibility = check_serving_plausibility(
        existing_per_serving.calories,
        per_100g.calories,
        serving_grams,
        product_name,
        rules,
    )

    if has_existing_serving_data and plausibility.is_plausible:
        _logger.debug("Serving data trusted: barcode=%s", barcode)
        return ValidatedNutrition(
            per_serving=existing_per_serving,
            per_100g=per_100g,
            serving_info=ServingSizeInfo(
                display_label=raw_serving_size or _DEFAULT_SERVING_LABEL,
                grams=serving_grams,
            ),
            is_serving_data_trusted=True,
        )

    if not plausibility.is_plausible and per_100g.calories is not None:
        corrected_grams = estimate_reasonable_serving_grams(
            product_name, per_100g.calories, rules
        )
        _logger.info(
            "Serving data corrected: barcode=%s grams=%s reason=%s",
            barcode,
            corrected_grams,
            plausibility.reason,
        )
        return ValidatedNutrition(
            per_serving=scale_nutrition(per_100g, corrected_grams / 100),
            per_100g=per_100g,
            serving_info=ServingSizeInfo(
                display_label=_estimated_label(corrected_grams),
                grams=corrected_grams,
                was_corrected=True,
                correction_reason=plausibility.reason,
            ),
            is_serving_data_trusted=False,
        )

    if (
        not has_existing_serving_data
        and serving_grams is not None
        and serving_grams > 0
        and per_100g.calories is not None
    ):
        if serving_grams > rules.max_serving_grams:
            grams = estimate_reasonable_serving_grams(
                product_name, per_100g.calories, rules
            )
            _logger.info(
                "Serving weight re-estimated: barcode=%s raw=%s grams=%s",
                barcode,
                serving_grams,
                grams,
            )
            serving_info = ServingSizeInfo(
                display_label=_estimated_label(grams),
                grams=grams,
                was_corrected=True,
                correction_reason=_WHOLE_PACKAGE_REASON,
            )
        else:
            _logger.debug("Serving derived from per-100g: barcode=%s", barcode)
            grams = serving_grams
            serving_info = ServingSizeInfo(
                display_label=raw_serving_size or f"{format_grams(grams)}g",
                grams=grams,
            )
        return ValidatedNutrition(
            per_serving=scale_nutrition(per_100g, grams / 100),
            per_100g=per_100g,
            serving_info=serving_info,
            is_serving_data_trusted=not serving_info.was_corrected,
        )

    _logger.debug("Falling back to per-100g nutrition: barcode=%s", barcode)
    return ValidatedNutrition(
        per_serving=per_100g,
        per_100g=per_100g,
        serving_info=ServingSizeInfo(display_label="100g", grams=100),
        is_serving_data_trusted=False,
    )


def _per_100g(nutriments: OffNutriments) -> NutrientSet:
    return NutrientSet(
        calories=resolve_energy_kcal(
            nutriments.energy_kcal_100g,
            nutriments.energy_100g,
            nutriments.energy_value,
        ),
        protein=nutriments.proteins_100g,
        carbs=nutriments.carbohydrates_100g,
        fat=nutriments.fat_100g,
        fiber=nutriments.fiber_100g,
        sugar=nutriments.sugars_100g,
        sodium=_sodium_mg(nutriments.sodium_100g),
    )


def _per_serving(nutriments: OffNutriments) -> NutrientSet:
    return NutrientSet(
        calories=resolve_energy_kcal(
            nutriments.energy_kcal_serving,
            nutriments.energy_serving,
        ),
        protein=nutriments.proteins_serving,
        carbs=nutriments.carbohydrates_serving,
        fat=nutriments.fat_serving,
        fiber=nutriments.fiber_serving,
        sugar=nutriments.sugars_serving,
        sodium=_sodium_mg(nutriments.sodium_serving),
    )


def _sodium_mg(grams: float | None) -> float | None:
    return grams * _MG_PER_G if grams is not None else None


def _serving_grams(
    raw_serving_size: str, serving_quantity: float | None
) -> float | None:
    """Serving weight from the label, else the numeric quantity field.

    Zero weights are treated as unknown.
    """
    parsed = parse_serving_grams(raw_serving_size)
    if parsed is not None and parsed > 0:
        return parsed
    return serving_quantity


def _estimated_label(grams: float) -> str:
    return f"~{format_grams(grams)}g (estimated serving)"
