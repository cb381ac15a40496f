"""Serving size label parsing."""

import re

# "1 cup (240ml)", "1 pod (14g)"
_PARENTHESIZED = re.compile(r"\((\d+\.?\d*)\s*(?:g|ml)\)")
# "30g", "236.0g", "15 g"
_TRAILING = re.compile(r"(\d+\.?\d*)\s*(?:g|ml)(?:\s|$)")
# "236.0"
_NUMBER_ONLY = re.compile(r"^(\d+\.?\d*)$")

_PATTERNS = (_PARENTHESIZED, _TRAILING, _NUMBER_ONLY)


def parse_serving_grams(label: str | None) -> float | None:
    """Extract a gram weight from a free-text serving size label.

    Millilitres are read as grams, which is close enough for water-based
    beverages but ignores density for oils and syrups.
    """
    if not label:
        return None
    lowered = label.lower().strip()
    for pattern in _PATTERNS:
        match = pattern.search(lowered)
        if match:
            return float(match.group(1))
    return None
