"""
Canonical slugs and combination keys.

A combination key joins an ordered list of slugs with ``DELIMITER``. The same
functions are used when indexing stored assignments and when turning a visitor
selection into lookup candidates, so both sides canonicalize identically.
"""
from typing import Iterable, List

from slugify import slugify

DELIMITER = "_svipro_"

# First-slug sentinels with special meaning inside stored assignments
GLOBAL_SLUG = "sviproglobal"
DEFAULT_SLUG = "svidefault"
NO_SLUG = "nullsvi"

# Same character set as the stored keys: lower-case ascii, digits, "-" and "_"
_DISALLOWED = r"[^-a-z0-9_]+"


def sanitize_slug(value) -> str:
    return slugify(str(value).strip().lower(), lowercase=True, regex_pattern=_DISALLOWED)


def combination_key(slugs: Iterable[str]) -> str:
    return sanitize_slug(DELIMITER.join(slugs))


def _delimiter_positions(text: str) -> List[int]:
    positions = []
    start = text.find(DELIMITER)
    while start != -1:
        positions.append(start)
        start = text.find(DELIMITER, start + len(DELIMITER))
    return positions


def normalize_selection(values: Iterable) -> List[str]:
    """
    Turn raw attribute values into an ordered list of lookup candidates.

    The list starts with the individual slugs (first occurrence wins), then
    every prefix combination of two or more slugs, and ends with the full
    combination key. Non-scalar and blank values are ignored.
    """
    slugs: List[str] = []
    for value in values:
        if value is None or isinstance(value, (list, tuple, dict, set)):
            continue
        text = str(value).strip()
        if not text:
            continue
        slug = sanitize_slug(text)
        if slug and slug not in slugs:
            slugs.append(slug)

    candidates = list(slugs)
    if len(slugs) > 1:
        combo = combination_key(slugs)
        positions = _delimiter_positions(combo)
        # the n-th delimiter closes the prefix made of the first n slugs
        for pos in positions[1:]:
            candidates.append(combo[:pos])
        candidates.append(combo)

    unique: List[str] = []
    for candidate in candidates:
        if candidate not in unique:
            unique.append(candidate)
    return unique
