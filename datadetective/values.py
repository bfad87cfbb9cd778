"""Cell value helpers.

Every cell is classified into exactly one kind: ``null``, ``bool``, ``number``,
``string`` or ``date``. Analyzers branch on the kind instead of relying on
truthiness, so ``0``, ``False`` and ``"0"`` never get confused.
"""
from datetime import date, datetime
from typing import Any, Optional
import math
import re

import numpy as np
import pandas as pd
from dateutil import parser as dateparser

from .constants import EMPTY_TOKENS

NULL, BOOL, NUMBER, STRING, DATE = 'null', 'bool', 'number', 'string', 'date'

BOOLEAN_TOKENS = frozenset(['true', 'false', 'yes', 'no', 'y', 'n', '1', '0'])

# (pattern, strptime format); None means ISO, parsed by pandas as-is
DATE_PATTERNS = [
    (re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2})?"), None),
    (re.compile(r"^\d{4}-\d{2}-\d{2}"), None),
    (re.compile(r"^\d{4}/\d{2}/\d{2}"), "%Y/%m/%d"),
    (re.compile(r"^\d{2}/\d{2}/\d{4}"), "%m/%d/%Y"),
    (re.compile(r"^\d{2}-\d{2}-\d{4}"), "%d-%m-%Y"),
]

_TIME_SUFFIX_FORMATS = (" %H:%M:%S", " %H:%M", "T%H:%M:%S", "T%H:%M", " %I:%M:%S %p", " %I:%M %p")

# fills missing components so free-form parses never depend on today's date
_PARSE_DEFAULT = datetime(1970, 1, 1)
_YEAR_RE = re.compile(r"\d{4}")


def classify(value: Any) -> str:
    if value is None or value is pd.NaT:
        return NULL
    if isinstance(value, (bool, np.bool_)):
        return BOOL
    if isinstance(value, (int, float, np.integer, np.floating)):
        if isinstance(value, (float, np.floating)) and math.isnan(value):
            return NULL
        return NUMBER
    if isinstance(value, (pd.Timestamp, datetime, date, np.datetime64)):
        if pd.isna(value):
            return NULL
        return DATE
    return STRING


def is_empty(value: Any) -> bool:
    kind = classify(value)
    if kind == NULL:
        return True
    if kind == STRING:
        text = str(value).strip()
        return text == '' or text in EMPTY_TOKENS
    return False


def empty_mask(rows, names) -> pd.DataFrame:
    """Boolean frame with one cell per (row, column); missing keys count as empty."""
    return pd.DataFrame(
        [[is_empty(row.get(c)) for c in names] for row in rows],
        columns=range(len(names)),
        dtype=bool,
    )


def is_unknown(value: Any) -> bool:
    return is_empty(value) or str(value).strip().lower() == 'unknown'


def text_of(value: Any) -> Optional[str]:
    """Return the stripped string for string cells, None for every other kind."""
    if classify(value) != STRING:
        return None
    text = str(value).strip()
    return text or None


def is_boolean_like(value: Any) -> bool:
    kind = classify(value)
    if kind == BOOL:
        return True
    if kind in (NUMBER, STRING):
        return str(value).strip().lower() in BOOLEAN_TOKENS
    return False


def to_number(value: Any) -> Optional[float]:
    kind = classify(value)
    if kind == NUMBER:
        num = float(value)
    elif kind == STRING:
        try:
            num = float(str(value).strip())
        except ValueError:
            return None
    else:
        return None
    return num if math.isfinite(num) else None


def _parse_pattern_date(text: str) -> Optional[pd.Timestamp]:
    for pattern, fmt in DATE_PATTERNS:
        m = pattern.match(text)
        if not m:
            continue
        if fmt is None:
            ts = pd.to_datetime(text, errors='coerce')
        else:
            ts = pd.NaT
            rest = text[m.end():]
            if rest.strip():
                for suffix in _TIME_SUFFIX_FORMATS:
                    ts = pd.to_datetime(text, format=fmt + suffix, errors='coerce')
                    if not pd.isna(ts):
                        break
                # an unrecognised time part is left to the free-form parser
                if pd.isna(ts):
                    return None
            else:
                ts = pd.to_datetime(text, format=fmt, errors='coerce')
        return None if pd.isna(ts) else ts
    return None


def looks_like_date(value: Any) -> bool:
    """Strict check used for column typing: a known pattern that also parses."""
    kind = classify(value)
    if kind == DATE:
        return True
    if kind != STRING:
        return False
    return _parse_pattern_date(str(value).strip()) is not None


def to_timestamp(value: Any) -> Optional[pd.Timestamp]:
    """Lenient timestamp coercion used by the analyzers.

    Strings are tried against the known date patterns first, then a free-form
    parse (only when a four digit year is present). Numbers are read as unix
    epochs in seconds or milliseconds depending on their scale.
    """
    kind = classify(value)
    if kind == DATE:
        return pd.Timestamp(value)
    if kind == NUMBER:
        num = float(value)
        if 1e9 <= num < 1e11:
            return pd.to_datetime(num, unit='s')
        if 1e12 <= num < 1e15:
            return pd.to_datetime(num, unit='ms')
        return None
    if kind != STRING:
        return None

    text = str(value).strip()
    ts = _parse_pattern_date(text)
    if ts is not None:
        return ts
    if not _YEAR_RE.search(text):
        return None
    try:
        return pd.Timestamp(dateparser.parse(text, default=_PARSE_DEFAULT))
    except (ValueError, OverflowError):
        return None
