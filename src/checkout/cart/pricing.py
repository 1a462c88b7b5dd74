"""Cart total arithmetic.

A line contributes unit cost multiplied by quantity. Totals are rounded to
cents so wallet comparisons are not thrown off by float noise.
"""


def line_total(cost: float, quantity: int) -> float:
    return cost * quantity


def cart_total(items) -> float:
    """Sum of ``cost * quantity`` over items exposing ``cost`` and ``quantity``."""
    return round(sum(line_total(item.cost, item.quantity) for item in items), 2)
