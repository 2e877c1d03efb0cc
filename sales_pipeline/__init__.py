from .analyze_sales_data import analyze
from .sales_formulas import (
    DEFAULT_CONFIG,
    calculate_bonus_by_profit,
    calculate_simple_revenue,
)
from .validate_sales_input import (
    InvalidInputError,
    MissingConfigError,
    SalesInputError,
)
