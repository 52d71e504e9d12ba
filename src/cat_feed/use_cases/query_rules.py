"""Pure parameter and post-filter rules shared by the use cases.

Nothing here touches the network: these are functions of their inputs only.
"""

from __future__ import annotations

from cat_feed.domain.cat import Breed, Cat

MIN_LIMIT = 1
MAX_LIMIT = 100


def clamp_limit(limit: int | None) -> int | None:
    """Clamp into [1, 100]; ``None`` stays unset (remote default)."""
    if limit is None:
        return None
    return max(MIN_LIMIT, min(MAX_LIMIT, limit))


def clamp_page(page: int | None) -> int | None:
    if page is None:
        return None
    return max(0, page)


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def contains_ignore_case(value: str | None, needle: str) -> bool:
    """Case-insensitive substring test; a missing value never matches."""
    if value is None:
        return False
    return needle.casefold() in value.casefold()


def breed_relevance(breed: Breed, query: str) -> int:
    """
    Rank how well a breed name matches a search query.

    0 = exact match, 1 = prefix, 2 = substring, 3 = anything else.
    """
    name = breed.name.casefold()
    needle = query.casefold()

    if name == needle:
        return 0
    if name.startswith(needle):
        return 1
    if needle in name:
        return 2
    return 3


def has_breed_info(cat: Cat) -> bool:
    """True when at least one breed carries a description, temperament or origin."""
    return any(
        not is_blank(breed.description)
        or not is_blank(breed.temperament)
        or not is_blank(breed.origin)
        for breed in cat.breeds
    )


def meets_min_dimensions(cat: Cat, min_width: int | None, min_height: int | None) -> bool:
    width_ok = min_width is None or cat.width >= min_width
    height_ok = min_height is None or cat.height >= min_height
    return width_ok and height_ok


# Tunable ranking weights for "prioritize quality"
QUALITY_HAS_BREED = 10
QUALITY_HAS_DESCRIPTION = 5
QUALITY_HAS_TEMPERAMENT = 3
QUALITY_HAS_CATEGORY = 2


def quality_score(cat: Cat) -> int:
    score = 0
    if cat.breeds:
        score += QUALITY_HAS_BREED
    if any(not is_blank(breed.description) for breed in cat.breeds):
        score += QUALITY_HAS_DESCRIPTION
    if any(not is_blank(breed.temperament) for breed in cat.breeds):
        score += QUALITY_HAS_TEMPERAMENT
    if cat.categories:
        score += QUALITY_HAS_CATEGORY
    return score
