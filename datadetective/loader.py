from pathlib import Path
from typing import Any, Dict, List, Optional
import json
import logging

import pandas as pd

from .constants import EngineConfig
from .errors import LoadError
from .models import Table
from .schema import build_table
from .utils import detect_encoding, detect_delimiter

log = logging.getLogger("datadetective.loader")

DELIMITED_EXTENSIONS = ('.csv', '.tsv', '.txt')


def load_table(path: str, cfg: Optional[Dict[str, Any]] = None, config: Optional[EngineConfig] = None) -> Table:
    """Read a CSV/TSV/text or JSON file into a Table."""
    cfg = cfg or {}
    p = Path(path)
    if not p.exists():
        raise LoadError(f"File not found: {path}")
    size = p.stat().st_size
    if size == 0:
        raise LoadError(f"File is empty: {path}")

    ext = p.suffix.lower()
    if ext == ".json" or cfg.get("type_override") == "json":
        headers, rows = _load_json(p)
    elif ext in DELIMITED_EXTENSIONS or cfg.get("type_override") == "csv":
        headers, rows = _load_delimited(p, cfg)
    else:
        # unknown extension: try JSON first, then delimited text
        try:
            headers, rows = _load_json(p)
        except LoadError:
            headers, rows = _load_delimited(p, cfg)

    log.info(f"Loaded {p.name}: {len(rows)} rows, {len(headers)} columns")
    return build_table(rows, headers=headers, file_size=size, cfg=config)


def _frame_rows(df: pd.DataFrame) -> List[Dict[str, Any]]:
    df = df.astype(object).where(df.notna(), None)
    return df.to_dict('records')


def _clean_header(name: Any) -> str:
    name = str(name).strip()
    if name.startswith('\ufeff'):
        name = name.lstrip('\ufeff')
    return name.strip('"').strip()


def _load_delimited(p: Path, cfg: Dict[str, Any]):
    enc = cfg.get("encoding") or detect_encoding(str(p))
    delim = cfg.get("delimiter") or detect_delimiter(str(p), enc)
    try:
        # keep raw strings; typing happens in build_table
        df = pd.read_csv(str(p), encoding=enc, delimiter=delim, dtype=str,
                         keep_default_na=False, skipinitialspace=True, on_bad_lines='skip')
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        log.exception("Delimited load failed")
        raise LoadError(f"Could not parse {p.name}: {e}")

    headers = [_clean_header(c) for c in df.columns]
    df.columns = headers
    log.debug(f"Parsed {p.name} with delimiter={delim!r} encoding={enc}")
    return headers, _frame_rows(df)


def _load_json(p: Path):
    try:
        data = json.loads(p.read_text(encoding=detect_encoding(str(p)), errors="replace"))
    except json.JSONDecodeError as e:
        raise LoadError(f"Invalid JSON in {p.name}: {e}")
    if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
        raise LoadError("JSON file must contain an array of objects")
    if not data:
        raise LoadError("JSON array is empty")

    # pandas only fixes the header order; records keep their own keys and value types
    headers = [str(c) for c in pd.DataFrame.from_records(data).columns]
    rows = [{str(k): v for k, v in record.items()} for record in data]
    return headers, rows
