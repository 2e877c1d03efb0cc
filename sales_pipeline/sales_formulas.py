# =============================================================================
# SALES FORMULAS
# =============================================================================
# - Default revenue and bonus strategies for the seller report
# - Callers may pass their own functions with the same signatures


from typing import Any, Callable, Dict, Mapping


RevenueFn = Callable[[Mapping[str, Any], Mapping[str, Any]], float]
BonusFn = Callable[[int, int, Mapping[str, Any]], float]


# Bonus share of profit by rank tier
TOP_SELLER_BONUS = 0.15
RUNNER_UP_BONUS = 0.10
STANDARD_BONUS = 0.05


def calculate_simple_revenue(item: Mapping[str, Any],
                             _product: Mapping[str, Any]
                             ) -> float:
    """
    Net revenue of one line item after its percentage discount.
    """

    decimal_discount = item['discount'] / 100

    return item['sale_price'] * item['quantity'] * (1 - decimal_discount)


def calculate_bonus_by_profit(index: int,
                              total: int,
                              seller: Mapping[str, Any]
                              ) -> float:
    """
    Bonus by position in the profit ranking.

    First place gets 15%, second and third 10%, the rest 5%,
    and the last seller nothing. Tiers are checked top-down, so a
    lone seller counts as first and the last of two or three sellers
    still gets 10%.
    """

    profit = seller['profit']

    if index == 0:
        bonus_percentage = TOP_SELLER_BONUS

    elif index in (1, 2):
        bonus_percentage = RUNNER_UP_BONUS

    elif index < total - 1:
        bonus_percentage = STANDARD_BONUS

    else:
        bonus_percentage = 0

    return profit * bonus_percentage


DEFAULT_CONFIG: Dict[str, Callable[..., float]] = {
    'calculate_revenue': calculate_simple_revenue,
    'calculate_bonus': calculate_bonus_by_profit,
}


# =============================================================================
# END OF SCRIPT
# =============================================================================
