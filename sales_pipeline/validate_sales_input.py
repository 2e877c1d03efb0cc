# =============================================================================
# VALIDATE SALES INPUT
# =============================================================================
# - Enforce structural integrity of the sales bundle before aggregation
# - Require both formula strategies in the run configuration
# - Fail fast: nothing is aggregated from a bundle that does not pass


from collections.abc import Mapping
from typing import Any, List


REQUIRED_COLLECTIONS = ['sellers', 'products', 'purchase_records']

RECORD_FIELDS = {
    'sellers': ['id', 'first_name', 'last_name'],
    'products': ['sku', 'purchase_price'],
    'purchase_records': ['seller_id', 'items'],
}
ITEM_FIELDS = ['sku', 'quantity', 'sale_price', 'discount']
REQUIRED_FUNCTIONS = ['calculate_revenue', 'calculate_bonus']


# ------------------------------------------------------------
# ERRORS
# ------------------------------------------------------------

class SalesInputError(ValueError):
    """Base class for input rejected before aggregation."""


class InvalidInputError(SalesInputError):
    """Bundle is missing, malformed, or has an empty collection."""


class MissingConfigError(SalesInputError):
    """Configuration is missing or lacks a formula function."""


# ------------------------------------------------------------
# BUNDLE VALIDATIONS
# ------------------------------------------------------------

def is_sequence(value: Any) -> bool:

    return isinstance(value, (list, tuple))


def validate_record_fields(record: Any, fields: List[str], label: str) -> None:
    if not isinstance(record, Mapping):
        raise InvalidInputError(
            f'{label}: expected a record, got {type(record).__name__}'
            )

    missing_fields = [field for field in fields if field not in record]
    if missing_fields:
        raise InvalidInputError(f'{label}: missing field(s): {missing_fields}')


def validate_purchase_items(record: Mapping[str, Any], label: str) -> None:
    items = record['items']

    if not is_sequence(items):
        raise InvalidInputError(
            f'{label}.items: expected a sequence of line items'
            )

    for position, item in enumerate(items):
        validate_record_fields(item, ITEM_FIELDS, f'{label}.items[{position}]')


def validate_input_bundle(bundle: Any) -> None:
    """
    Structural bundle validations.

    Every record must carry the fields the aggregation reads.
    Stops at the first broken collection or record.
    """

    if bundle is None:
        raise InvalidInputError('sales bundle is missing')

    if not isinstance(bundle, Mapping):
        raise InvalidInputError(
            f'sales bundle must be a mapping, got {type(bundle).__name__}'
            )

    for name in REQUIRED_COLLECTIONS:
        collection = bundle.get(name)

        if not is_sequence(collection):
            raise InvalidInputError(f'{name}: expected a sequence of records')

        if len(collection) == 0:
            raise InvalidInputError(f'{name}: collection is empty')

        for position, record in enumerate(collection):
            label = f'{name}[{position}]'
            validate_record_fields(record, RECORD_FIELDS[name], label)

            if name == 'purchase_records':
                validate_purchase_items(record, label)


# ------------------------------------------------------------
# CONFIG VALIDATIONS
# ------------------------------------------------------------

def validate_config(config: Any) -> None:
    """
    Both formula strategies must be present and callable.
    """

    if config is None or not isinstance(config, Mapping):
        raise MissingConfigError('configuration is required')

    missing_functions: List[str] = [
        name for name in REQUIRED_FUNCTIONS if not callable(config.get(name))
        ]
    if missing_functions:
        raise MissingConfigError(
            f'configuration is missing required function(s): {missing_functions}'
            )


def validate_sales_input(bundle: Any, config: Any) -> None:
    validate_input_bundle(bundle)
    validate_config(config)


# =============================================================================
# END OF SCRIPT
# =============================================================================
