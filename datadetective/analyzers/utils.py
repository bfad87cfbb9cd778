from typing import Any, Iterable, List, Mapping, Optional, Tuple
import re

import pandas as pd

from .. import values
from ..models import Table

# Candidate keys per semantic role, in precedence order.
ACTION_FIELDS = ('action', 'event', 'event_name', 'activity', 'event_type')
# product views and purchases only read the plain action columns
PRODUCT_ACTION_FIELDS = ('action', 'event', 'event_name', 'activity')
USER_ID_FIELDS = ('user_id',)
TIMESTAMP_FIELDS = ('timestamp', 'created_at', 'date', 'time', 'event_time')
TIME_SPENT_FIELDS = ('time_spent_sec', 'duration', 'session_duration', 'time_spent')
PRODUCT_FIELDS = ('product_name', 'product', 'item_name', 'item', 'name')
ORDER_VALUE_FIELDS = ('total_order_value', 'revenue', 'price', 'amount')
COST_FIELDS = ('cost', 'cost_price', 'wholesale_price')
QUANTITY_FIELDS = ('quantity', 'qty', 'count')

session_col_re = re.compile(r"session.*id", flags=re.I)
user_col_re = re.compile(r"user.*id", flags=re.I)
action_col_re = re.compile(r"^(action|event|event_name|activity)$", flags=re.I)


def first_present(row: Mapping[str, Any], fields: Iterable[str]) -> Tuple[Optional[str], Any]:
    """Return (key, value) for the first field holding a non-empty value."""
    for f in fields:
        v = row.get(f)
        if not values.is_empty(v):
            return f, v
    return None, None


def first_text(row: Mapping[str, Any], fields: Iterable[str]) -> Optional[str]:
    for f in fields:
        text = values.text_of(row.get(f))
        if text is not None:
            return text
    return None


def first_number(row: Mapping[str, Any], fields: Iterable[str]) -> Optional[float]:
    for f in fields:
        num = values.to_number(row.get(f))
        if num is not None:
            return num
    return None


def first_timestamp(row: Mapping[str, Any], fields: Iterable[str] = TIMESTAMP_FIELDS):
    # the first non-empty field decides; an unparseable value is not retried elsewhere
    _, v = first_present(row, fields)
    if v is None:
        return None
    return values.to_timestamp(v)


def find_columns(names: Iterable[str], pattern) -> List[str]:
    return [n for n in names if pattern.search(str(n))]


def wall_clock(ts) -> Optional[pd.Timestamp]:
    """Drop the timezone but keep the local reading, so 14:30Z stays 14:30."""
    if ts is None or ts.tzinfo is None:
        return ts
    return ts.tz_localize(None)


def role_frame(table: Table, action_fields: Iterable[str] = ACTION_FIELDS) -> pd.DataFrame:
    """Resolve each row's semantic roles once into typed columns.

    Columns: action, product (text or None), ts (naive datetime64), spent,
    order_value, cost, quantity (float, NaN when missing).
    """
    rows = table.rows
    action_fields = tuple(action_fields)

    def numbers(fields):
        return pd.Series([first_number(r, fields) for r in rows], dtype='float64')

    stamps = pd.Series([wall_clock(first_timestamp(r)) for r in rows], dtype=object)
    return pd.DataFrame({
        'action': pd.Series([first_text(r, action_fields) for r in rows], dtype=object),
        'product': pd.Series([first_text(r, PRODUCT_FIELDS) for r in rows], dtype=object),
        'ts': pd.to_datetime(stamps, errors='coerce'),
        'spent': numbers(TIME_SPENT_FIELDS),
        'order_value': numbers(ORDER_VALUE_FIELDS),
        'cost': numbers(COST_FIELDS),
        'quantity': numbers(QUANTITY_FIELDS),
    })


def purchase_mask(actions: pd.Series) -> pd.Series:
    return actions.fillna('').astype(str).str.lower().str.contains('purchase', regex=False)
