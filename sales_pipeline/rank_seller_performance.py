# =============================================================================
# RANK SELLER PERFORMANCE
# =============================================================================
# - Order sellers by profit and assign rank-tiered bonuses
# - Reduce each seller's sold products to the top sellers by quantity
# - Output: report rows ready for rendering, rounded to cents


from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Mapping, Optional, Sequence

import pandas as pd

from .pipeline_log import SalesRunLog, log_info
from .sales_formulas import BonusFn
from .seller_sales_facts import SellerStats


TOP_PRODUCTS_LIMIT = 10
CENT = Decimal('0.01')


# ------------------------------------------------------------
# RANKING
# ------------------------------------------------------------

def rank_sellers(stats: Sequence[SellerStats]) -> List[SellerStats]:
    """
    Sort by profit descending.

    Stable: sellers with equal profit keep their input order.
    """

    profits = pd.Series([seller['profit'] for seller in stats], dtype='float64')
    order = profits.sort_values(ascending=False, kind='stable').index

    return [stats[position] for position in order]


def assign_bonuses(ranked: Sequence[SellerStats], calculate_bonus: BonusFn) -> None:
    total = len(ranked)

    for index, seller in enumerate(ranked):
        seller['bonus'] = calculate_bonus(index, total, seller)


# ------------------------------------------------------------
# TOP PRODUCTS
# ------------------------------------------------------------

def derive_top_products(products_sold: Mapping[Any, float],
                        limit: int = TOP_PRODUCTS_LIMIT
                        ) -> List[Dict[str, Any]]:
    if not products_sold:

        return []

    quantities = pd.Series(list(products_sold.values()),
                           index=list(products_sold.keys()))
    top = quantities.sort_values(ascending=False, kind='stable').head(limit)

    # Quantities come from the mapping so ints are not widened to float
    return [
        {'sku': sku, 'quantity': products_sold[sku]}
        for sku in top.index.tolist()
    ]


# ------------------------------------------------------------
# REPORT ROWS
# ------------------------------------------------------------

def round_money(value: float) -> float:
    """
    Round to cents, exact halves away from zero.
    """

    return float(Decimal(float(value)).quantize(CENT, rounding=ROUND_HALF_UP))


def build_report_rows(ranked: Sequence[SellerStats]) -> List[Dict[str, Any]]:

    return [
        {
            'seller_id': seller['id'],
            'name': seller['name'],
            'revenue': round_money(seller['revenue']),
            'profit': round_money(seller['profit']),
            'sales_count': int(seller['sales_count']),
            'top_products': seller['top_products'],
            'bonus': round_money(seller['bonus']),
        }
        for seller in ranked
    ]


def rank_and_report(stats: Sequence[SellerStats],
                    calculate_bonus: BonusFn,
                    report: Optional[SalesRunLog] = None
                    ) -> List[Dict[str, Any]]:
    ranked = rank_sellers(stats)
    assign_bonuses(ranked, calculate_bonus)

    for seller in ranked:
        seller['top_products'] = derive_top_products(seller['products_sold'])

    rows = build_report_rows(ranked)

    if report is not None:
        log_info(f'Ranked {len(rows)} seller(s) by profit', report)

    return rows


# =============================================================================
# END OF SCRIPT
# =============================================================================
