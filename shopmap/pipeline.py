"""
Batch runs over the shop data file.
load shops → transform → save, with the core doing only pure transformations.
"""

import time
from typing import List, Optional

from .models import MapConfig, ReparseStats, ShopRecord
from .output import ShopJsonWriter, load_shops, to_persisted
from .services import (
    parse_hours,
    clean_shop_genres,
    filter_shops,
    is_open_at,
    now_in,
    structured_hours_of,
)
from .utils import init_logger, get_logger


def reparse_shop(shop: ShopRecord) -> str:
    """
    Recompute hours_structured for one shop.

    Returns:
        Outcome: "created", "fixed", "updated", "unchanged" or "cleared"
    """
    previous = shop.hours_structured

    if not shop.hours or not shop.hours.strip():
        if previous is not None:
            shop.hours_structured = None
            return "cleared"
        return "unchanged"

    structured = to_persisted(parse_hours(shop.hours))
    if previous == structured:
        return "unchanged"

    shop.hours_structured = structured

    if previous is None:
        return "created"

    was_empty = all(value is None for value in (previous.get('parsed') or {}).values())
    now_has_hours = any(value is not None for value in structured['parsed'].values())
    if was_empty and now_has_hours:
        return "fixed"
    return "updated"


def reparse_shops(shops: List[ShopRecord]) -> ReparseStats:
    """Re-parse hours for every shop in place and count the outcomes."""
    logger = get_logger()
    stats = ReparseStats(total=len(shops))

    for shop in shops:
        try:
            outcome = reparse_shop(shop)
        except (TypeError, ValueError) as e:
            logger.error(f"✗ {shop.name}: {e}")
            stats.failed += 1
            stats.issues.append(f"{shop.name}: {e}")
            continue

        setattr(stats, outcome, getattr(stats, outcome) + 1)
        if outcome == "created":
            logger.debug(f"✓ [new] {shop.name}")
        elif outcome == "fixed":
            logger.info(f"✓ [fixed] {shop.name}")
        elif outcome in ("updated", "cleared"):
            logger.debug(f"✓ [{outcome}] {shop.name}")

    return stats


def run_reparse(config: MapConfig, dry_run: bool = False) -> ReparseStats:
    """
    Re-parse every shop's hours in the data file.

    Args:
        config: Map configuration
        dry_run: Parse and report, but do not write
    """
    logger = init_logger(
        debug_mode=config.debug_mode,
        debug_log_file=config.debug_log_file if config.debug_mode else None
    )
    logger.print_header("Business Hours Re-parse")

    start_time = time.time()

    shops = load_shops(config.data_file)
    logger.info(f"Loaded {len(shops)} shop(s) from {config.data_file}")

    stats = reparse_shops(shops)

    if dry_run:
        logger.warning("Dry run: data file not written")
    elif stats.changed:
        ShopJsonWriter(config.target_file).write_shops(shops)
    else:
        logger.info("No changes to write")

    logger.print_summary(
        "Re-parse Complete",
        [
            ["Total shops", stats.total],
            ["New", stats.created],
            ["Fixed", stats.fixed],
            ["Updated", stats.updated],
            ["Cleared", stats.cleared],
            ["Unchanged", stats.unchanged],
            ["Failed", stats.failed],
        ],
        duration=time.time() - start_time
    )

    for issue in stats.issues:
        logger.warning(f"  - {issue}")

    return stats


def run_clean_genres(config: MapConfig, dry_run: bool = False) -> int:
    """Strip excluded genre tags from every shop. Returns the number of shops changed."""
    logger = init_logger(
        debug_mode=config.debug_mode,
        debug_log_file=config.debug_log_file if config.debug_mode else None
    )
    logger.print_header("Genre Cleanup")

    shops = load_shops(config.data_file)
    updated = clean_shop_genres(shops, config.genre_exclude_patterns)

    if dry_run:
        logger.warning("Dry run: data file not written")
    elif updated:
        ShopJsonWriter(config.target_file).write_shops(shops)

    logger.success(f"Updated genres on {updated} shop(s)")
    return updated


def run_query(
    config: MapConfig,
    text: Optional[str] = None,
    genre: Optional[str] = None,
    day: Optional[str] = None,
    time_of_day: Optional[str] = None,
    open_now: bool = False
) -> List[ShopRecord]:
    """
    Shops in the data file matching the given filters.
    open_now checks the current time in config.timezone instead of day/time.
    """
    shops = load_shops(config.data_file)
    matched = filter_shops(shops, text=text, genre=genre, day=day, time=time_of_day)

    if open_now:
        now = now_in(config.timezone)
        get_logger().debug(f"Checking openness at {now.isoformat()}")
        matched = [shop for shop in matched if is_open_at(structured_hours_of(shop), now)]

    return matched
