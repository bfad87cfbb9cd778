from typing import Any, Dict, Iterable, List, Mapping, Optional
import re

from .constants import EngineConfig
from .errors import ValidationError
from .models import Column, Table, TableSummary
from . import values

date_name_re = re.compile(r"time|date|created|updated|timestamp", flags=re.I)
user_name_re = re.compile(r"user|customer|client|account|member|person", flags=re.I)
user_exact_re = re.compile(r"^(id|uid|uuid|user_id|customer_id)$", flags=re.I)
event_name_re = re.compile(r"event|action|activity|behavior|click|view|visit|session|page|interaction", flags=re.I)
ts_name_re = re.compile(r"time|date|timestamp|created|updated|occurred|when|at$", flags=re.I)


def infer_column_type(name: str, sample_values: Iterable[Any], cfg: Optional[EngineConfig] = None) -> str:
    """Infer one of string/number/date/boolean from a bounded sample.

    Checks run in order and the first one reaching the threshold wins. Boolean
    goes before number so that 0/1 flags are not read as numbers.
    """
    cfg = cfg or EngineConfig()
    samples = [v for v in sample_values if not values.is_empty(v)][:cfg.type_sample_size]
    if not samples:
        return 'string'

    def ratio(pred) -> float:
        return sum(1 for v in samples if pred(v)) / len(samples)

    threshold = cfg.type_match_threshold
    if ratio(values.is_boolean_like) >= threshold:
        return 'boolean'
    if ratio(lambda v: values.to_number(v) is not None and values.classify(v) != values.BOOL) >= threshold:
        return 'number'
    if ratio(values.looks_like_date) >= threshold or date_name_re.search(str(name)):
        return 'date'
    return 'string'


def infer_column_roles(columns: List[Column]) -> Dict[str, List[str]]:
    """Return candidate column names per role, in column order."""
    user_ids, events, timestamps = [], [], []
    for col in columns:
        lname = str(col.name).lower()
        if user_name_re.search(lname) or user_exact_re.match(lname) or lname.endswith('_id'):
            user_ids.append(col.name)
        if event_name_re.search(lname):
            events.append(col.name)
        if ts_name_re.search(lname) or col.type == 'date':
            timestamps.append(col.name)
    return {
        'possible_user_id_columns': user_ids,
        'possible_event_columns': events,
        'possible_timestamp_columns': timestamps,
    }


def _collect_headers(rows: List[Mapping[str, Any]]) -> List[str]:
    headers: List[str] = []
    seen = set()
    for row in rows:
        for key in row.keys():
            if key not in seen:
                seen.add(key)
                headers.append(key)
    return headers


def build_table(rows: Iterable[Mapping[str, Any]], headers: Optional[List[str]] = None,
                file_size: Optional[int] = None, cfg: Optional[EngineConfig] = None) -> Table:
    cfg = cfg or EngineConfig()
    rows = list(rows)
    for i, row in enumerate(rows):
        if not isinstance(row, Mapping):
            raise ValidationError(f"Row {i} is a {type(row).__name__}, expected a mapping")
    rows = [dict(r) for r in rows]
    headers = list(headers) if headers is not None else _collect_headers(rows)

    columns = []
    for name in headers:
        samples = []
        for row in rows:
            v = row.get(name)
            if not values.is_empty(v):
                samples.append(v)
                if len(samples) >= cfg.type_sample_size:
                    break
        columns.append(Column(name=name, type=infer_column_type(name, samples, cfg), sample_values=samples[:5]))

    roles = infer_column_roles(columns)
    summary = TableSummary(total_rows=len(rows), total_columns=len(columns), **roles)
    return Table(columns=columns, rows=rows, summary=summary, file_size=file_size)
