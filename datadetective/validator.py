from typing import List, Optional
import json
import logging
import re

import pandas as pd

from .constants import EngineConfig
from .models import Table, ValidationResult
from . import values

log = logging.getLogger("datadetective.validator")

generic_name_re = re.compile(r"^(unnamed(:\s*\d+)?|column\d+|field\d+)$", flags=re.I)
timestamp_name_re = re.compile(r"timestamp|date|time|created_at|updated_at", flags=re.I)


class DataValidator:
    """Structural and data-quality checks run before any analyzer."""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.cfg = config or EngineConfig()

    def validate(self, table: Table) -> ValidationResult:
        errors: List[str] = []
        warnings: List[str] = []
        try:
            self._check_structure(table, errors, warnings)
            completeness = self._check_quality(table, errors, warnings)
            self._check_columns(table, errors, warnings)
            self._check_rows(table, errors, warnings)
        except Exception as e:
            log.exception("Data validation failed")
            return ValidationResult(errors=[f"Validation failed: {e}"], warnings=[], confidence='low')

        confidence = self.confidence_for(errors, warnings)
        if errors or warnings:
            log.info(f"Data validation completed: {len(errors)} errors, {len(warnings)} warnings, confidence={confidence}")
        return ValidationResult(errors=errors, warnings=warnings, confidence=confidence, completeness=completeness)

    def confidence_for(self, errors: List[str], warnings: List[str]) -> str:
        if errors:
            return 'low'
        if len(warnings) > self.cfg.max_warnings_for_medium:
            return 'low'
        if warnings:
            return 'medium'
        return 'high'

    def _sample(self, table: Table):
        return table.rows[:self.cfg.quality_sample_rows]

    def _check_structure(self, table, errors, warnings):
        if not table.columns:
            errors.append('No columns found in dataset')
        if not table.rows:
            errors.append('No rows found in dataset')
            return

        n = table.row_count
        if n < self.cfg.very_few_rows_warning:
            warnings.append(f'Dataset has very few rows (< {self.cfg.very_few_rows_warning}), analysis may be limited')
        elif n < self.cfg.min_rows_warning:
            warnings.append(f'Dataset has fewer than {self.cfg.min_rows_warning} rows, analysis may be limited')

        if table.columns:
            expected = table.column_names
            inconsistent = sum(1 for row in table.rows if any(k not in row for k in expected))
            if inconsistent:
                warnings.append(f'{inconsistent} rows have inconsistent structure')

    def _check_quality(self, table, errors, warnings) -> Optional[float]:
        if not table.rows or not table.columns:
            return None

        sample = self._sample(table)
        names = table.column_names
        empty = values.empty_mask(sample, names)
        total_cells = empty.size
        completeness = float((total_cells - int(empty.values.sum())) / total_cells * 100)

        if completeness < self.cfg.completeness_error_pct:
            errors.append(f'Data completeness is too low: {completeness:.1f}%')
        elif completeness < self.cfg.completeness_warning_pct:
            warnings.append(f'Data completeness could be improved: {completeness:.1f}%')

        all_empty = empty.all(axis=0)
        empty_cols = [names[i] for i in all_empty[all_empty].index]
        if empty_cols:
            warnings.append(f"{len(empty_cols)} columns are completely empty: {', '.join(map(str, empty_cols))}")
        return completeness

    def _check_columns(self, table, errors, warnings):
        if not table.columns:
            return
        names = [str(n) for n in table.column_names]

        seen, dups = set(), []
        for name in names:
            if name in seen and name not in dups:
                dups.append(name)
            seen.add(name)
        if dups:
            errors.append(f"Duplicate column names found: {', '.join(dups)}")

        generic = [n for n in names if generic_name_re.match(n.strip())]
        if generic:
            warnings.append(f"Found columns with generic names: {', '.join(generic)}")

        if not any(timestamp_name_re.search(n) for n in names):
            warnings.append('No timestamp column detected, time-based analysis will be limited')

    def _check_rows(self, table, errors, warnings):
        if not table.rows:
            return

        empty_rows = sum(1 for row in table.rows if all(values.is_empty(v) for v in row.values()))
        if empty_rows:
            if empty_rows == table.row_count:
                errors.append('All rows are empty')
            else:
                warnings.append(f'{empty_rows} completely empty rows found')

        sample = self._sample(table)
        keys = pd.Series([json.dumps(row, sort_keys=True, default=str) for row in sample])
        dup_count = int(keys.duplicated().sum())
        if dup_count:
            warnings.append(f'Found {dup_count} duplicate rows in sample of {len(sample)} rows')
