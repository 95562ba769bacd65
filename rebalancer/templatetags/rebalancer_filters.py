from decimal import Decimal, InvalidOperation
from typing import Any

from django import template

from rebalancer.domain.enums import Action

register = template.Library()

ACTION_CSS = {
    Action.BUY: "text-success",
    Action.INVEST: "text-success",
    Action.SELL: "text-danger",
    Action.SAVE: "text-warning",
    Action.HOLD: "text-muted",
    Action.EXCLUDED: "text-secondary",
}


@register.filter
def money(value: Any, decimals: int = 2) -> str:
    """
    Format as 1,234.56 or (1,234.56) for negatives. Blank for None.

    Examples:
        {{ 1234.5|money }}    -> 1,234.50
        {{ -1234.6|money:0 }} -> (1,235)
    """
    if value is None or value == "":
        return ""
    try:
        val = Decimal(str(value))
    except (ValueError, TypeError, InvalidOperation):
        return str(value)
    formatted = f"{abs(val):,.{decimals}f}"
    return f"({formatted})" if val < 0 else formatted


@register.filter
def percent(value: Any, decimals: int = 2) -> str:
    """
    Format as 12.50% or (12.50%) for negatives. Blank for None.

    Examples:
        {{ 12.5|percent }}     -> 12.50%
        {{ -12.5|percent:1 }}  -> (12.5%)
    """
    if value is None or value == "":
        return ""
    try:
        val = Decimal(str(value))
    except (ValueError, TypeError, InvalidOperation):
        return str(value)
    formatted = f"{abs(val):.{decimals}f}%"
    return f"({formatted})" if val < 0 else formatted


@register.filter
def action_css(value: Any) -> str:
    """Bootstrap text class for an action label."""
    try:
        return ACTION_CSS[Action(str(value))]
    except ValueError:
        return ""
