"""
Filtering primitives for the map and list views, plus genre cleanup.
"""

from typing import Iterable, List, Optional

from ..models import ShopRecord, StructuredHours
from ..utils import get_logger
from .openness import is_shop_open, DayArg
from .schedule import parse_hours


def matches_text(shop: ShopRecord, text: Optional[str]) -> bool:
    """All whitespace-separated terms must appear in the shop name (case-insensitive)."""
    if not text or not text.strip():
        return True

    name = shop.name.lower()
    return all(term in name for term in text.lower().split())


def matches_genre(shop: ShopRecord, genre: Optional[str]) -> bool:
    """Genre must be one of the shop's tags, or its category."""
    if not genre:
        return True
    return genre in shop.genre or shop.category == genre


def structured_hours_of(shop: ShopRecord) -> Optional[StructuredHours]:
    """
    Structured hours for a shop.
    Uses the persisted block when it matches the raw text, otherwise parses
    the raw text.
    """
    from ..output.serializer import from_persisted

    if shop.hours_structured and shop.hours_structured.get('text') == shop.hours:
        return from_persisted(shop.hours_structured)
    return parse_hours(shop.hours)


def filter_shops(
    shops: Iterable[ShopRecord],
    text: Optional[str] = None,
    genre: Optional[str] = None,
    day: DayArg = None,
    time: Optional[str] = None
) -> List[ShopRecord]:
    """Shops passing every supplied filter, in input order."""
    matched = []
    for shop in shops:
        if not matches_text(shop, text):
            continue
        if not matches_genre(shop, genre):
            continue
        if (day or time) and not is_shop_open(structured_hours_of(shop), day, time):
            continue
        matched.append(shop)
    return matched


def collect_genres(shops: Iterable[ShopRecord]) -> List[str]:
    """Distinct, non-blank genres for the filter dropdown, sorted."""
    genres = set()
    for shop in shops:
        genres.update(g for g in shop.genre if g and g.strip())
    return sorted(genres)


def clean_genres(genres: Iterable[str], exclude_patterns: Iterable[str]) -> List[str]:
    """
    Drop genre tags containing any excluded pattern (place names, prices,
    symbols scraped alongside the genre) and de-duplicate, keeping order.
    """
    patterns = list(exclude_patterns)
    cleaned = []
    for genre in genres:
        if any(pattern in genre for pattern in patterns):
            continue
        if genre not in cleaned:
            cleaned.append(genre)
    return cleaned


def clean_shop_genres(shops: Iterable[ShopRecord], exclude_patterns: Iterable[str]) -> int:
    """Clean genres on every shop in place. Returns the number of shops changed."""
    logger = get_logger()
    patterns = list(exclude_patterns)
    updated = 0

    for shop in shops:
        if not shop.genre:
            continue
        cleaned = clean_genres(shop.genre, patterns)
        if cleaned != shop.genre:
            logger.info(f"{shop.name}: {len(shop.genre)} → {len(cleaned)} genre(s)")
            shop.genre = cleaned
            updated += 1

    return updated
