from typing import List, Optional

import pandas as pd

from .base import AnalyzerBase
from .formatting import round_half_up
from .utils import TIME_SPENT_FIELDS, TIMESTAMP_FIELDS, purchase_mask, role_frame
from ..models import AnalysisResult, Table


class TimeAnalyzer(AnalyzerBase):
    """Purchase peaks per calendar day and engagement per hour of day."""
    name = 'time'
    label = 'Time'

    def compute(self, table: Table) -> List[AnalysisResult]:
        if not table.rows:
            return [self.no_data_result('No rows available for time analysis')]

        df = role_frame(table)
        res = []
        daily = self._purchases_by_date(df)
        if daily is not None:
            res.append(daily)
        hourly = self._time_by_hour(df)
        if hourly is not None:
            res.append(hourly)
        if not res:
            res.append(self.no_data_result(
                'No timestamped purchases or time-spent values found; looked for '
                f"{', '.join(TIMESTAMP_FIELDS)} and {', '.join(TIME_SPENT_FIELDS)}"
            ))
        return res

    def _purchases_by_date(self, df: pd.DataFrame) -> Optional[AnalysisResult]:
        bought = df[purchase_mask(df['action']) & df['ts'].notna()]
        if bought.empty:
            return None

        per_day = bought.groupby(bought['ts'].dt.date).size()
        chart = [{'name': day.isoformat(), 'value': int(n)} for day, n in per_day.items()]
        # idxmax returns the first (earliest) day on ties
        peak = per_day.idxmax()
        return AnalysisResult(
            id='purchases-by-date',
            title='Daily Purchase Trends',
            description='Number of purchases per day',
            value={item['name']: item['value'] for item in chart},
            chart_type='line',
            chart_data=chart,
            insight=f"Peak purchase day: {peak.isoformat()} with {int(per_day.max())} purchases",
        )

    def _time_by_hour(self, df: pd.DataFrame) -> Optional[AnalysisResult]:
        timed = df.dropna(subset=['ts', 'spent'])
        if timed.empty:
            return None

        per_hour = timed.groupby(timed['ts'].dt.hour)['spent'].agg(['count', 'mean'])
        rounded = per_hour['mean'].map(round_half_up)
        chart = [{'name': f'{int(h)}:00', 'value': int(v)} for h, v in rounded.items()]
        peak = int(rounded.idxmax())
        return AnalysisResult(
            id='time-by-hour',
            title='Engagement by Hour',
            description='Average time spent per hour of day',
            value={
                int(h): {'count': int(row['count']), 'average': round(float(row['mean']), 2)}
                for h, row in per_hour.iterrows()
            },
            chart_type='bar',
            chart_data=chart,
            insight=f"Peak engagement at {peak}:00 with {int(rounded.max())} seconds average",
        )
