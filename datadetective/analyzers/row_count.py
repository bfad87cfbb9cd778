from typing import List

import pandas as pd

from .base import AnalyzerBase
from .formatting import pct
from .utils import action_col_re, find_columns, purchase_mask, session_col_re, user_col_re
from ..models import COLUMN_TYPES, AnalysisResult, Table
from ..schema import infer_column_roles
from .. import values


class RowCountAnalyzer(AnalyzerBase):
    name = 'row-count'
    label = 'Row Count'

    def compute(self, table: Table) -> List[AnalysisResult]:
        rows = table.rows
        names = table.column_names
        res: List[AnalysisResult] = []

        res.append(AnalysisResult(
            id='total-rows',
            title='Total Rows',
            description='Total number of rows in the dataset',
            value=table.row_count,
            insight=f'Dataset contains {table.row_count:,} rows',
        ))
        res.append(AnalysisResult(
            id='total-columns',
            title='Total Columns',
            description='Number of columns available for analysis',
            value=len(names),
            insight=f"Dataset has {len(names)} columns: {', '.join(map(str, names[:5]))}{', and more' if len(names) > 5 else ''}",
        ))

        if table.file_size is not None:
            res.append(AnalysisResult(
                id='file-size',
                title='File Size',
                description='Size of the source file in bytes',
                value=table.file_size,
                insight=f'Source file is {table.file_size / 1024:,.1f} KB',
            ))

        empty = values.empty_mask(rows, names)
        if empty.size:
            completeness = pct(int((~empty).values.sum()), empty.size)
            quality = 'excellent' if completeness > 90 else 'good' if completeness > 70 else 'fair'
            res.append(AnalysisResult(
                id='data-completeness',
                title='Data Completeness',
                description='Percentage of non-empty cells across all rows and columns',
                value=completeness,
                insight=f'Data is {completeness:.1f}% complete, {quality} quality for analysis',
                confidence='high' if completeness > 70 else 'medium',
            ))

        if table.columns:
            res.append(self._column_types(table))
            structure = self._structure(table)
            if structure is not None:
                res.append(structure)

        session_cols = find_columns(names, session_col_re)
        if session_cols:
            n = self._distinct(rows, session_cols[0])
            res.append(AnalysisResult(
                id='unique-sessions',
                title='Unique Sessions',
                description=f'Number of distinct values in {session_cols[0]}',
                value=n,
                insight=f'{n:,} unique sessions tracked',
            ))

        user_cols = find_columns(names, user_col_re)
        if user_cols:
            n = self._distinct(rows, user_cols[0])
            res.append(AnalysisResult(
                id='unique-users',
                title='Unique Users',
                description=f'Number of distinct identified users in {user_cols[0]}',
                value=n,
                insight=f'{n:,} unique logged-in users identified',
            ))

        action_cols = find_columns(names, action_col_re)
        if action_cols:
            res.extend(self._action_counts(rows, names, action_cols[0]))

        return res

    @staticmethod
    def _column_types(table: Table) -> AnalysisResult:
        types = pd.Series([c.type for c in table.columns]).value_counts()
        dist = {t: int(types[t]) for t in COLUMN_TYPES if t in types.index}
        parts = [f"{n} {t} column{'s' if n > 1 else ''}" for t, n in dist.items()]
        return AnalysisResult(
            id='column-types',
            title='Column Types',
            description='Distribution of inferred data types across columns',
            value=dist,
            chart_type='pie',
            chart_data=[{'name': t, 'value': n} for t, n in dist.items()],
            insight=f"Dataset contains {', '.join(parts)}",
        )

    @staticmethod
    def _structure(table: Table):
        summary = table.summary
        if summary.total_columns == len(table.columns):
            ids = summary.possible_user_id_columns
            events = summary.possible_event_columns
            stamps = summary.possible_timestamp_columns
        else:
            # hand-built table without a derived summary
            roles = infer_column_roles(table.columns)
            ids = roles['possible_user_id_columns']
            events = roles['possible_event_columns']
            stamps = roles['possible_timestamp_columns']
        if not ids and not stamps:
            return None

        depth = 'behavioral or transactional analysis' if table.row_count > 100 else 'basic relational analysis'
        return AnalysisResult(
            id='data-structure',
            title='Data Structure',
            description='Identifier, event and timestamp columns found in the dataset',
            value={
                'identifiers': len(ids),
                'events': len(events),
                'timestamps': len(stamps),
                'identifierColumns': list(ids),
                'timestampColumns': list(stamps),
            },
            insight=(
                f"Found {len(ids)} potential identifier column{'s' if len(ids) != 1 else ''} and "
                f"{len(stamps)} timestamp column{'s' if len(stamps) != 1 else ''}, suited to {depth}"
            ),
            confidence='medium',
        )

    @staticmethod
    def _known(rows, col) -> pd.Series:
        cells = pd.Series([row.get(col) for row in rows], dtype=object)
        known = cells[~cells.map(values.is_unknown).astype(bool)]
        return known.astype(str).str.strip()

    def _distinct(self, rows, col) -> int:
        return int(self._known(rows, col).nunique())

    def _action_counts(self, rows, names, col) -> List[AnalysisResult]:
        out = []
        n_actions = self._distinct(rows, col)
        out.append(AnalysisResult(
            id='unique-actions',
            title='Distinct Actions',
            description=f'Number of distinct values in {col}',
            value=n_actions,
            insight=f'{n_actions:,} distinct action types recorded',
        ))

        frame = pd.DataFrame({
            'action': pd.Series([values.text_of(r.get(col)) for r in rows], dtype=object),
            'order_missing': pd.Series([values.is_empty(r.get('order_id')) for r in rows], dtype=bool),
            'order_value': pd.Series([values.to_number(r.get('total_order_value')) for r in rows], dtype='float64'),
        })
        purchases = frame[purchase_mask(frame['action'])]
        n_purchases = len(purchases)
        out.append(AnalysisResult(
            id='purchase-count',
            title='Purchase Events',
            description='Rows whose action mentions a purchase',
            value=n_purchases,
            insight=f'{n_purchases:,} purchase events recorded',
        ))

        if 'order_id' in names and n_purchases:
            missing = int(purchases['order_missing'].sum())
            out.append(AnalysisResult(
                id='null-order-ids',
                title='Purchases Missing Order ID',
                description='Purchase events without an order identifier',
                value=missing,
                insight=f'{missing:,} purchases lack order IDs ({pct(missing, n_purchases):.1f}% of purchases)',
                confidence='high' if missing == 0 else 'medium',
            ))

        if 'total_order_value' in names and n_purchases:
            zero = int((purchases['order_value'] == 0).sum())
            out.append(AnalysisResult(
                id='zero-value-purchases',
                title='Zero Value Purchases',
                description='Purchase events with a total order value of 0',
                value=zero,
                insight=f'{zero:,} purchases have zero value' + (', a potential data quality issue' if zero else ''),
                confidence='high' if zero == 0 else 'medium',
            ))
        return out
