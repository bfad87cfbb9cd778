from typing import List, Optional

import pandas as pd

from .base import AnalyzerBase
from .formatting import distribute_percentages, pct
from .utils import USER_ID_FIELDS, role_frame
from ..models import AnalysisResult, Table
from .. import values


class ActionAnalyzer(AnalyzerBase):
    """Categorical breakdown of the action column plus the logged-in share."""
    name = 'action'
    label = 'Action'

    def compute(self, table: Table) -> List[AnalysisResult]:
        if not table.rows:
            return [self.no_data_result('No rows available for action analysis')]

        res = [self._breakdown(role_frame(table))]
        auth = self._authentication(table)
        if auth is not None:
            res.append(auth)
        return res

    def _breakdown(self, df: pd.DataFrame) -> AnalysisResult:
        actions = df['action'].fillna('unknown')
        # first-seen order, then a stable sort so ties stay in row order
        counts = actions.groupby(actions, sort=False).size().sort_values(ascending=False, kind='stable')
        percentages = distribute_percentages([int(c) for c in counts])
        chart = [
            {'name': name, 'value': int(count), 'percentage': p}
            for (name, count), p in zip(counts.items(), percentages)
        ]
        top = chart[0]
        return AnalysisResult(
            id='action-breakdown',
            title='Action Type Distribution',
            description='Breakdown of user actions by type',
            value={name: int(count) for name, count in counts.items()},
            chart_type='pie',
            chart_data=chart,
            insight=f"Most common action: {top['name']} ({top['percentage']:.1f}%)",
        )

    def _authentication(self, table: Table) -> Optional[AnalysisResult]:
        field = next((f for f in USER_ID_FIELDS if f in table.column_names), None)
        if field is None:
            return None

        known = pd.Series([not values.is_unknown(row.get(field)) for row in table.rows], dtype=bool)
        logged_in = int(known.sum())
        anonymous = table.row_count - logged_in
        share = pct(logged_in, table.row_count)
        return AnalysisResult(
            id='user-authentication',
            title='User Authentication Status',
            description='Logged-in vs anonymous user events',
            value={'loggedIn': logged_in, 'anonymous': anonymous},
            chart_type='pie',
            chart_data=[
                {'name': 'Logged-in', 'value': logged_in, 'percentage': share},
                {'name': 'Anonymous', 'value': anonymous, 'percentage': round(100 - share, 1)},
            ],
            insight=f'{share:.1f}% of events from authenticated users',
        )
