# =============================================================================
# SELLER SALES FACTS
# =============================================================================
# - Fold purchase records into per-seller running totals
# - Single forward pass in input order, no backtracking
# - Records and items with unknown references are skipped, never raised


from typing import Any, Dict, List, Mapping, Optional, Sequence

from .pipeline_log import SalesRunLog, log_info, log_warning
from .sales_formulas import RevenueFn


SellerStats = Dict[str, Any]


# ------------------------------------------------------------
# SELLER STATS
# ------------------------------------------------------------

def init_seller_stats(sellers: Sequence[Mapping[str, Any]]) -> List[SellerStats]:

    return [
        {
            'id': seller['id'],
            'name': f"{seller['first_name']} {seller['last_name']}",
            'revenue': 0,
            'profit': 0,
            'sales_count': 0,
            'products_sold': {},
        }
        for seller in sellers
    ]


# ------------------------------------------------------------
# LOOKUP TABLES
# ------------------------------------------------------------

def build_seller_index(stats: Sequence[SellerStats]) -> Dict[Any, SellerStats]:

    return {seller['id']: seller for seller in stats}


def build_product_index(products: Sequence[Mapping[str, Any]]
                        ) -> Dict[Any, Mapping[str, Any]]:

    return {product['sku']: product for product in products}


# ------------------------------------------------------------
# AGGREGATION
# ------------------------------------------------------------

def add_line_item(seller: SellerStats,
                  item: Mapping[str, Any],
                  product: Mapping[str, Any],
                  calculate_revenue: RevenueFn
                  ) -> None:

    revenue = calculate_revenue(item, product)
    seller['revenue'] += revenue

    cost = product['purchase_price'] * item['quantity']
    seller['profit'] += revenue - cost

    sku = item['sku']
    products_sold = seller['products_sold']
    products_sold[sku] = products_sold.get(sku, 0) + item['quantity']


def aggregate_purchase_records(bundle: Mapping[str, Any],
                               calculate_revenue: RevenueFn,
                               report: Optional[SalesRunLog] = None
                               ) -> List[SellerStats]:
    """
    Build one SellerStats per input seller from the purchase records.

    A record with an unknown seller_id contributes nothing. An item with
    an unknown sku is dropped, but its record still counts as a sale.
    """

    stats = init_seller_stats(bundle['sellers'])
    seller_index = build_seller_index(stats)
    product_index = build_product_index(bundle['products'])

    skipped_records = 0
    skipped_items = 0

    for record in bundle['purchase_records']:
        seller = seller_index.get(record.get('seller_id'))
        if seller is None:
            skipped_records += 1

            continue

        seller['sales_count'] += 1

        for item in record.get('items') or []:
            product = product_index.get(item.get('sku'))
            if product is None:
                skipped_items += 1

                continue

            add_line_item(seller, item, product, calculate_revenue)

    if report is not None:
        log_info(
            f'Aggregated {len(bundle["purchase_records"])} purchase record(s) '
            f'for {len(stats)} seller(s)',
            report
            )

        if skipped_records or skipped_items:
            log_warning(
                f'Skipped {skipped_records} record(s) with unknown seller_id '
                f'and {skipped_items} item(s) with unknown sku',
                report
                )

    return stats


# =============================================================================
# END OF SCRIPT
# =============================================================================
