"""
Regular expression patterns and token tables for business-hours parsing.
All patterns expect text that already went through HoursNormalizer.
"""

import re

# ============================================================
# LEXICAL NORMALIZATION
# ============================================================

FULLWIDTH_DIGITS = str.maketrans('０１２３４５６７８９', '0123456789')

# Canonical range separator written back into normalized text
RANGE_SEPARATOR = '～'

# Range dash variants: wave dashes, tilde, hyphen-minus, full-width hyphen, minus, en/em dash
RANGE_DASH_PATTERN = re.compile(r'[〜～~\-－−–—]')

# Whitespace runs that contain a line break collapse to one newline
LINE_BREAK_RUN_PATTERN = re.compile(r'\s*[\r\n]\s*')
HORIZONTAL_SPACE_PATTERN = re.compile(r'[^\S\n]+')

# ============================================================
# DAY TOKENS
# ============================================================

# Day range, e.g. "月～金" (holiday is never part of a range)
DAY_RANGE_PATTERN = re.compile(r'([月火水木金土日])\s*～\s*([月火水木金土日])')

# Enumerated list, e.g. "月・水・金", "日･祝"
DAY_LIST_PATTERN = re.compile(r'[月火水木金土日祝](?:\s*[・･]\s*[月火水木金土日祝])+')

# Tokens that carry no resolvable day (day before / after a public holiday)
IGNORED_DAY_TOKENS = ('祝前日', '祝後日')

# Calendar dates such as "12月31日", "1月", "15日", "12/31"
CALENDAR_DATE_PATTERN = re.compile(r'\d{1,2}\s*月(?:\s*\d{1,2}\s*日)?|\d{1,2}\s*日|\d{1,2}/\d{1,2}')

WEEKDAY_SUFFIX_PATTERN = re.compile(r'曜日?')

# Word → replacement, applied in order
DAY_ALIASES = (
    ('祝祭日', '祝'),
    ('祝日', '祝'),
    ('休日', '祝'),
    ('平日', '月～金'),
    ('毎日', '月～日'),
)

# Words whose 日 or 月 is not a weekday
DAY_NOISE_WORDS = (
    '営業日', '本日', '当日', '翌日', '前日', '毎月', '今月',
    '日替わり', '日替り', '月替わり', '月替り', '終日', '日中', '日本', '土産', '金額', '料金',
)

# ============================================================
# CLOSURES
# ============================================================

IRREGULAR_CLOSURE = '不定休'
NO_CLOSURE = '無休'
NO_CLOSURE_PATTERN = re.compile(r'無休|定休日なし|休みなし')

IRREGULAR_CLOSURE_PATTERN = re.compile(r'不定休日?')

NTH_WEEK_MARKER = '第'

# "第3水曜", "第2・4月曜日": closes only some weeks
NTH_WEEK_PATTERN = re.compile(r'第[\d・･]+\s*[月火水木金土日](?:曜日?)?')

# Note right after a closure clause, e.g. "（祝日の場合は翌日）"
CLOSURE_NOTE_PATTERN = re.compile(r'\s*[（(【［\[][^）)】］\]]*[）)】］\]]')

_DAY_CHARS = r'月火水木金土日祝曜・･～'

_CLOSED_RUN = r'(?:第[\d・･]+)?[月火水木金土日祝](?:第[\d・･]+|[' + _DAY_CHARS + r'])*'

# Day-only run after a comma, e.g. the "火曜" of "月曜、火曜"; a run followed
# by ":" qualifies opening hours instead
_CLOSED_CONTINUATION = (
    r'(?:\s*[、，,]\s*(?:第[\d・･]+|祝祭日|祝日|[' + _DAY_CHARS + r'])+'
    r'(?![第' + _DAY_CHARS + r'])(?!\s*:))*'
)

# "定休日：日曜日", "定休日：月曜、火曜", captured up to the next delimiter
CLOSURE_COLON_PATTERN = re.compile(
    r'(?:定休日|休業日|店休日)\s*:\s*'
    r'((?:第[\d・･]+|[^\s、，,/／■()（）【】\[\]［］\d:])+' + _CLOSED_CONTINUATION + r')'
)

# "日曜定休", "火・水曜日休み", "火曜・第3水曜定休"
CLOSURE_SUFFIX_PATTERN = re.compile(
    r'(' + _CLOSED_RUN + r')(?:\s?定休日?|休業日?|休み)'
)

# "定休日 月曜"
CLOSURE_PREFIX_PATTERN = re.compile(
    r'(?:定休日|休業日|店休日)\s*(' + _CLOSED_RUN + r')'
)

CLOSURE_PATTERNS = (
    CLOSURE_COLON_PATTERN,
    CLOSURE_SUFFIX_PATTERN,
    CLOSURE_PREFIX_PATTERN,
)

# ============================================================
# TIME BLOCKS
# ============================================================

# "17:00～23:00", "17:00～翌2:00", "18:00～26:00"
TIME_RANGE_PATTERN = re.compile(
    r'(?P<open_h>\d{1,2}):(?P<open_m>\d{2})\s*～\s*'
    r'(?P<next_day>翌日?\s*)?(?P<close_h>\d{1,2}):(?P<close_m>\d{2})'
)

ALL_DAY_PATTERN = re.compile(r'24時間(?:営業)?')

# Bracketed qualifier without digits: "（土・日）", "【平日】"
BRACKET_QUALIFIER_PATTERN = re.compile(
    r'[（(【［\[](?P<inner>[^（）()【】［］\[\]\d]*)[）)】］\]]'
)

# Segment boundaries; times never carry across these
HARD_DELIMITER_PATTERN = re.compile(r'[\n■◆●|｜]')

# Prepared text made of day glyphs and separators only, e.g. " 月～土"
DAY_ONLY_PATTERN = re.compile(r'[\s:、，,/／]*[' + _DAY_CHARS + r'][' + _DAY_CHARS + r'\s、，,]*')

# Brackets mentioning these describe exceptions, not the days served
EXCLUSION_WORDS = ('除く', '除き', '以外')

# "19:00" as supplied by a query
CLOCK_PATTERN = re.compile(r'^(\d{1,2}):(\d{2})$')

# "17:00～26:00" as persisted
PERSISTED_RANGE_PATTERN = re.compile(r'(\d{1,2}):(\d{2})\s*～\s*(\d{1,2}):(\d{2})')
