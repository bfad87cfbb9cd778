from typing import List

import pandas as pd

from .base import AnalyzerBase
from .formatting import currency_fmt, round_half_up
from .utils import (
    COST_FIELDS, ORDER_VALUE_FIELDS, PRODUCT_ACTION_FIELDS, role_frame,
)
from ..models import AnalysisResult, Table


def profit_column(df: pd.DataFrame) -> pd.Series:
    """order value - cost * quantity (quantity defaults to 1); NaN when order value or cost is missing."""
    return df['order_value'] - df['cost'] * df['quantity'].fillna(1)


class ProductAnalyzer(AnalyzerBase):
    """Top-N products by views, purchases and total profit."""
    name = 'product'
    label = 'Product'

    def compute(self, table: Table) -> List[AnalysisResult]:
        if not table.rows:
            return [self.no_data_result('No product information available for analysis')]

        df = role_frame(table, action_fields=PRODUCT_ACTION_FIELDS)
        df = df[df['product'].notna()]
        action = df['action'].fillna('').str.lower()
        viewed = df[action == 'view']
        bought = df[action == 'purchase'].assign(profit=lambda d: profit_column(d))

        views = viewed.groupby('product', sort=False).size()
        purchases = bought.groupby('product', sort=False).size()
        profits = (
            bought.dropna(subset=['profit'])
            .groupby('product', sort=False)['profit']
            .agg(['sum', 'count'])
        )
        return [
            self._top_counts(views, 'top-viewed-products', 'Viewed', 'views'),
            self._top_counts(purchases, 'top-purchased-products', 'Purchased', 'purchases'),
            self._top_profits(profits),
        ]

    def _top_counts(self, counts: pd.Series, rid: str, verb: str, noun: str) -> AnalysisResult:
        title = f'Top {self.cfg.top_n} Most {verb} Products'
        description = f'Products with highest {noun[:-1]} counts'
        if counts.empty:
            return AnalysisResult(
                id=rid, title=title, description=description, value={},
                insight=f'No product {noun} found; needs a product name and a {noun[:-1]} action',
                confidence='low',
            )
        # stable sort: equal counts keep first-seen product order
        top = counts.sort_values(ascending=False, kind='stable').head(self.cfg.top_n)
        chart = [{'name': name, 'value': int(n)} for name, n in top.items()]
        return AnalysisResult(
            id=rid,
            title=title,
            description=description,
            value={name: int(n) for name, n in counts.items()},
            chart_type='bar',
            chart_data=chart,
            insight=f"Most {verb.lower()}: {chart[0]['name']} with {chart[0]['value']} {noun}",
        )

    def _top_profits(self, profits: pd.DataFrame) -> AnalysisResult:
        title = f'Top {self.cfg.top_n} Most Profitable Products'
        description = 'Products generating highest total profit'
        if profits.empty:
            return AnalysisResult(
                id='top-profit-products', title=title, description=description, value=[],
                insight='No profit data; purchases need an order value '
                        f"({', '.join(ORDER_VALUE_FIELDS)}) and a cost ({', '.join(COST_FIELDS)})",
                confidence='low',
            )
        ranked = profits.sort_values('sum', ascending=False, kind='stable').head(self.cfg.top_n)
        chart = [{'name': name, 'value': round_half_up(total)} for name, total in ranked['sum'].items()]
        value = [
            {
                'product': name,
                'totalProfit': float(row['sum']),
                'purchaseCount': int(row['count']),
                'averageProfit': float(row['sum'] / row['count']),
            }
            for name, row in profits.iterrows()
        ]
        top = chart[0]
        return AnalysisResult(
            id='top-profit-products',
            title=title,
            description=description,
            value=value,
            chart_type='bar',
            chart_data=chart,
            insight=f"Most profitable: {top['name']} with {currency_fmt(top['value'])} profit",
        )
