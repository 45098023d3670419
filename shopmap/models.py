"""
Data models for the shop map.
All models use Pydantic for validation and serialization.
"""

from typing import Optional, List, Dict, Any, Tuple, FrozenSet, Union
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator


# Minutes in one day, and the latest close time we accept (06:00 next day)
MINUTES_PER_DAY = 1440
CLOSE_CEILING = 1800


class DayKey(str, Enum):
    """Canonical day keys used by the structured schedule."""
    MON = "mon"
    TUE = "tue"
    WED = "wed"
    THU = "thu"
    FRI = "fri"
    SAT = "sat"
    SUN = "sun"
    HOLIDAY = "holiday"

    @classmethod
    def parse(cls, value) -> "DayKey":
        """
        Resolve a day given by the UI or a caller.

        Accepts a DayKey, a key in any case ("mon", "Mon") or a single
        Japanese glyph ("月", "祝").
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise TypeError(f"day must be a string, got {type(value).__name__}")

        key = value.strip().lower()
        for day in cls:
            if day.value == key:
                return day

        glyph_day = GLYPH_TO_DAY.get(value.strip())
        if glyph_day is not None:
            return glyph_day

        raise ValueError(f"Unknown day key: {value!r}")


# Monday→Sunday; holiday is never part of a range
WEEK_ORDER: Tuple[DayKey, ...] = (
    DayKey.MON, DayKey.TUE, DayKey.WED, DayKey.THU,
    DayKey.FRI, DayKey.SAT, DayKey.SUN,
)

ALL_DAYS: Tuple[DayKey, ...] = WEEK_ORDER + (DayKey.HOLIDAY,)

GLYPH_TO_DAY: Dict[str, DayKey] = {
    '月': DayKey.MON,
    '火': DayKey.TUE,
    '水': DayKey.WED,
    '木': DayKey.THU,
    '金': DayKey.FRI,
    '土': DayKey.SAT,
    '日': DayKey.SUN,
    '祝': DayKey.HOLIDAY,
}


def format_minutes(minutes: int) -> str:
    """Render minutes since midnight as HH:MM, keeping extended hours (25:30)."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


class TimeRange(BaseModel):
    """
    One service window, in minutes since local midnight.
    close_minutes may run past 1440 to express a close after midnight.
    """
    model_config = ConfigDict(frozen=True)

    open_minutes: int
    close_minutes: int

    @model_validator(mode='after')
    def check_bounds(self):
        if not 0 <= self.open_minutes < MINUTES_PER_DAY:
            raise ValueError(f"open_minutes out of range: {self.open_minutes}")
        if not self.open_minutes < self.close_minutes <= CLOSE_CEILING:
            raise ValueError(
                f"close_minutes must be after open and at most {CLOSE_CEILING}: "
                f"{self.close_minutes}"
            )
        return self

    def contains(self, minutes: int) -> bool:
        """Half-open check: [open, close)."""
        return self.open_minutes <= minutes < self.close_minutes

    def to_text(self) -> str:
        """Persisted form, e.g. "17:00～26:00"."""
        return f"{format_minutes(self.open_minutes)}～{format_minutes(self.close_minutes)}"


DaySchedule = Dict[DayKey, Optional[Tuple[TimeRange, ...]]]


def empty_schedule() -> DaySchedule:
    """Schedule with every canonical key set to None."""
    return {day: None for day in ALL_DAYS}


class StructuredHours(BaseModel):
    """Parsed business hours, derived from the raw text alone."""
    model_config = ConfigDict(frozen=True)

    raw_text: str
    schedule: DaySchedule = Field(default_factory=empty_schedule)
    closed_days: FrozenSet[DayKey] = frozenset()
    closed_label: Optional[str] = None

    @field_validator('schedule')
    @classmethod
    def fill_missing_days(cls, value: DaySchedule) -> DaySchedule:
        filled = empty_schedule()
        filled.update(value)
        return filled

    @model_validator(mode='after')
    def closed_days_have_no_hours(self):
        for day in self.closed_days:
            if self.schedule.get(day) is not None:
                raise ValueError(f"Closed day {day.value} must not have hours")
        return self

    @property
    def has_hours(self) -> bool:
        """True if at least one day carries a time range."""
        return any(ranges for ranges in self.schedule.values())

    @property
    def is_unparseable(self) -> bool:
        """No ranges and no closure information could be derived."""
        return not self.has_hours and not self.closed_days and not self.closed_label

    def ranges_for(self, day: DayKey) -> Optional[Tuple[TimeRange, ...]]:
        return self.schedule.get(day)


class ShopRecord(BaseModel):
    """
    A shop entry from the data file.
    Fields we do not know about are kept as-is so a re-save does not drop them.
    Coordinates are stored as found (blank strings included); use
    `coordinates` to read them.
    """
    model_config = ConfigDict(extra='allow', populate_by_name=True)

    name: str
    address: Optional[str] = None
    lat: Optional[Union[float, str]] = None
    lng: Optional[Union[float, str]] = None
    genre: List[str] = Field(default_factory=list)
    category: Optional[str] = None
    url: Optional[str] = None

    # Raw hours text as scraped, and its persisted parse
    hours: Optional[str] = Field(default=None, alias='hoursRaw')
    hours_structured: Optional[Dict[str, Any]] = None

    # Key the raw hours were loaded from, written back unchanged
    _hours_key: str = PrivateAttr(default='hours')

    @model_validator(mode='wrap')
    @classmethod
    def remember_hours_key(cls, data, handler):
        record = handler(data)
        if isinstance(data, dict) and 'hoursRaw' in data and 'hours' not in data:
            record._hours_key = 'hoursRaw'
        return record

    @field_validator('genre', mode='before')
    @classmethod
    def genre_as_list(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value

    @staticmethod
    def _as_coordinate(value) -> Optional[float]:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        try:
            return float(value)
        except ValueError:
            return None

    @property
    def coordinates(self) -> Optional[Tuple[float, float]]:
        """(lat, lng) as floats, or None when either is missing or blank."""
        lat, lng = self._as_coordinate(self.lat), self._as_coordinate(self.lng)
        if lat is None or lng is None:
            return None
        return lat, lng

    @property
    def has_coordinates(self) -> bool:
        return self.coordinates is not None

    def to_json_dict(self) -> Dict[str, Any]:
        """Dump for the data file, using the keys the record was loaded with."""
        data = self.model_dump(mode='json', by_alias=False, exclude_unset=True)
        if self._hours_key != 'hours':
            data = {(self._hours_key if key == 'hours' else key): value for key, value in data.items()}
        return data


class MapConfig(BaseModel):
    """Configuration for the shop map tools."""

    # Data
    data_file: str = "./docs/data/shops.json"
    output_file: Optional[str] = None  # None rewrites data_file in place

    # Genres
    genre_exclude_patterns: List[str] = Field(
        default_factory=lambda: ['佐賀市', '佐賀駅', '佐賀・鳥栖', '佐賀', '鍋島駅', '×', '-', '￥', '～']
    )

    # Query
    timezone: str = "Asia/Tokyo"

    # Debug
    debug_mode: bool = False
    debug_log_file: str = "./debug/debug.log"

    @property
    def target_file(self) -> str:
        return self.output_file or self.data_file


class ReparseStats(BaseModel):
    """Outcome counters for a batch re-parse."""
    total: int = 0
    created: int = 0
    fixed: int = 0
    updated: int = 0
    unchanged: int = 0
    cleared: int = 0
    failed: int = 0
    issues: List[str] = Field(default_factory=list)

    @property
    def changed(self) -> int:
        return self.created + self.fixed + self.updated + self.cleared
