# =============================================================================
# ANALYZE SALES DATA
# =============================================================================
# - Validate the sales bundle and the formula configuration
# - Aggregate purchase records into per-seller facts
# - Rank sellers by profit, assign bonuses, and emit the performance report
# - Designed for deterministic execution: same input, same report


import os
import sys
import json
from typing import Any, Dict, List, Mapping, Optional

import pandas as pd

from .pipeline_log import SalesRunLog, init_report, log_error, log_info
from .rank_seller_performance import rank_and_report
from .sales_formulas import DEFAULT_CONFIG
from .seller_sales_facts import aggregate_purchase_records
from .validate_sales_input import SalesInputError, validate_sales_input


# ------------------------------------------------------------
# CONFIGURATIONS
# ------------------------------------------------------------

SALES_DATA_BASE_PATH = os.getenv('SALES_DATA_BASE_PATH', 'data/raw')
SALES_REPORT_PATH = os.getenv(
    'SALES_REPORT_PATH', 'data/reports/seller_performance.json'
    )

TABLE_CONFIG = {
    'sellers': {
        'file': 'sellers.csv',
        'key': 'id'
    },
    'products': {
        'file': 'products.csv',
        'key': 'sku'
    },
}

PURCHASE_RECORDS_FILE = 'purchase_records.json'


# ------------------------------------------------------------
# SALES REPORT
# ------------------------------------------------------------

def analyze(bundle: Any,
            config: Any,
            report: Optional[SalesRunLog] = None
            ) -> List[Dict[str, Any]]:
    """
    Per-seller performance report, ordered by profit descending.

    `config` maps 'calculate_revenue' to a (item, product) -> revenue
    function and 'calculate_bonus' to a (index, total, seller) -> bonus
    function; DEFAULT_CONFIG holds the standard pair.

    Raises InvalidInputError or MissingConfigError before any
    aggregation work when the bundle or config is unusable.
    """

    validate_sales_input(bundle, config)

    stats = aggregate_purchase_records(
        bundle, config['calculate_revenue'], report
        )

    return rank_and_report(stats, config['calculate_bonus'], report)


# ------------------------------------------------------------
# Input-Output Helpers
# ------------------------------------------------------------

def load_table(csv_path: str,
               table_name: str,
               key_column: str,
               report: SalesRunLog
               ) -> Optional[List[Dict[str, Any]]]:
    """
    Load a CSV table as a list of records.
    The key column is read as text so lookups match the purchase records.
    """

    try:
        df = pd.read_csv(csv_path, dtype={key_column: str})
        log_info(f'Loaded {table_name} file: {os.path.basename(csv_path)} ({len(df)} rows)', report)

        return df.to_dict(orient='records')

    except Exception as e:
        log_error(f'Failed to load {table_name} file {csv_path}: {e}', report)

        return None


def normalize_purchase_record(record: Mapping[str, Any]) -> Dict[str, Any]:
    items = [
        {**item, 'sku': str(item['sku'])} if 'sku' in item else dict(item)
        for item in record.get('items') or []
    ]

    return {**record, 'seller_id': str(record.get('seller_id')), 'items': items}


def load_purchase_records(json_path: str,
                          report: SalesRunLog
                          ) -> Optional[List[Dict[str, Any]]]:
    try:
        with open(json_path, encoding='utf-8') as f:
            records = json.load(f)

    except Exception as e:
        log_error(f'Failed to load purchase_records file {json_path}: {e}', report)

        return None

    if not isinstance(records, list):
        log_error(f'purchase_records: {json_path} does not hold a JSON array', report)

        return None

    log_info(f'Loaded purchase_records file: {os.path.basename(json_path)} '
             f'({len(records)} records)',
             report)

    return [normalize_purchase_record(record) for record in records]


def load_sales_bundle(base_path: str,
                      report: SalesRunLog
                      ) -> Optional[Dict[str, Any]]:
    """
    Assemble the sales bundle from <base_path>.
    Returns None if any part is missing or unreadable.
    """

    bundle: Dict[str, Any] = {}

    for table_name, table in TABLE_CONFIG.items():
        csv_path = os.path.join(base_path, table['file'])

        if not os.path.exists(csv_path):
            log_error(f'Missing file: {csv_path}', report)

            continue

        records = load_table(csv_path, table_name, table['key'], report)
        if records is not None:
            bundle[table_name] = records

    json_path = os.path.join(base_path, PURCHASE_RECORDS_FILE)

    if not os.path.exists(json_path):
        log_error(f'Missing file: {json_path}', report)

    else:
        records = load_purchase_records(json_path, report)
        if records is not None:
            bundle['purchase_records'] = records

    if report['errors']:

        return None

    return bundle


def write_sales_report(rows: List[Dict[str, Any]],
                       output_path: str,
                       report: SalesRunLog
                       ) -> None:
    output_dir = os.path.dirname(output_path)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)

    pd.DataFrame(rows).to_json(output_path, orient='records', indent=2)
    log_info(f'Wrote {len(rows)} report row(s) to {output_path}', report)


# ------------------------------------------------------------
# MAIN EXECUTION
# ------------------------------------------------------------

def main() -> None:
    report = init_report()

    bundle = load_sales_bundle(SALES_DATA_BASE_PATH, report)
    if bundle is None:
        sys.exit(1)

    try:
        rows = analyze(bundle, DEFAULT_CONFIG, report)

    except SalesInputError as e:
        log_error(str(e), report)
        sys.exit(1)

    write_sales_report(rows, SALES_REPORT_PATH, report)

    if report['errors']:
        sys.exit(1)

    sys.exit(0)


if __name__ == '__main__':
    main()


# =============================================================================
# END OF SCRIPT
# =============================================================================
