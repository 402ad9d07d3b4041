"""Order pricing for screen-printed t-shirt runs.

A pure cost/revenue computation: per-item print costs come from a small,
read-only table indexed by the number of colors in a print and by the size
band of the order. Everything else is arithmetic over the order inputs.

Print-cost table
----------------
Rows are the number of colors in a print (1, 2, 3); columns are the order
size band: small (< 20 shirts), medium (20-39) and large (40+). A print with
zero colors means no print on that side and costs nothing.
"""

from __future__ import annotations

from dataclasses import dataclass

PRINTING_MATRIX = (
    (3.0, 2.0, 1.0),
    (4.0, 3.0, 2.0),
    (5.0, 4.0, 3.0),
)

MAX_COLORS = len(PRINTING_MATRIX)

# Lower bounds (inclusive) of the medium and large order-size bands.
MEDIUM_ORDER_SIZE = 20
LARGE_ORDER_SIZE = 40


@dataclass(frozen=True)
class OrderQuote:
    """Derived totals for one order at one markup."""

    unit_price: float
    total_revenue: float
    total_cost: float
    profit: float


def size_band(order_size: int) -> int:
    """Return the print-cost column for an order size (0 small, 1 medium, 2 large)."""
    if order_size < MEDIUM_ORDER_SIZE:
        return 0
    if order_size < LARGE_ORDER_SIZE:
        return 1
    return 2


def print_cost(band: int, colors: int) -> float:
    """Per-item cost of one print side with ``colors`` colors."""
    if colors == 0:
        return 0.0
    return PRINTING_MATRIX[colors - 1][band]


def order_cost(
    order_size: int,
    unit_cost: float,
    front_colors: int,
    back_colors: int,
    shipping_cost: float,
    setup_cost: float,
) -> float:
    """Total cost of producing an order: prints, blanks, shipping and setup.

    Raises
    ------
    ValueError
        If the order size is not positive, a color count is outside
        ``0..MAX_COLORS`` or any cost is negative.
    """
    if order_size < 1:
        raise ValueError(f"Order size must be a positive integer, got {order_size}")
    for label, colors in (("front", front_colors), ("back", back_colors)):
        if not 0 <= colors <= MAX_COLORS:
            raise ValueError(f"Number of {label} colors must be in 0..{MAX_COLORS}, got {colors}")
    for label, amount in (("unit", unit_cost), ("shipping", shipping_cost), ("setup", setup_cost)):
        if amount < 0:
            raise ValueError(f"{label.capitalize()} cost must be non-negative, got {amount}")

    band = size_band(order_size)
    front_total = order_size * print_cost(band, front_colors)
    back_total = order_size * print_cost(band, back_colors)
    blanks_total = order_size * unit_cost
    return front_total + back_total + blanks_total + shipping_cost + setup_cost


def quote_order(
    order_size: int,
    unit_cost: float,
    front_colors: int,
    back_colors: int,
    shipping_cost: float,
    setup_cost: float,
    markup: float,
) -> OrderQuote:
    """Price an order with a percentage markup applied to its cost.

    The markup is a percentage of cost (``25`` means cost + 25%). With a zero
    markup revenue equals cost and profit is zero.
    """
    total_cost = order_cost(order_size, unit_cost, front_colors, back_colors, shipping_cost, setup_cost)
    factor = 1 + markup / 100
    total_revenue = total_cost * factor
    return OrderQuote(
        unit_price=total_cost / order_size * factor,
        total_revenue=total_revenue,
        total_cost=total_cost,
        profit=total_revenue - total_cost,
    )
