"""Display helpers shared by the dispatcher and the text exporter."""

from __future__ import annotations

import re
from typing import Optional, Union

_NUMBERED_SLOT_RE = re.compile(r"^(?P<word>[A-Za-z]+)[ _-]?(?P<number>\d+)$")


def format_number(value: Union[int, float]) -> str:
    """Render a number the way the model wrote it: ``15`` not ``15.0``."""

    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_price(value: Optional[float], currency: str) -> Optional[str]:
    if value is None:
        return None
    return f"{format_number(value)} {currency}".rstrip()


def format_amount(value: float, currency: str) -> str:
    """Two-decimal amount used for budget suggestions."""

    return f"{value:.2f} {currency}".rstrip()


def format_quantity(quantity: Optional[Union[int, float, str]], unit: Optional[str]) -> Optional[str]:
    if quantity is None and unit is None:
        return None
    shown = format_number(quantity) if isinstance(quantity, (int, float)) else quantity
    if shown is None:
        return unit
    if unit is None:
        return shown
    return f"{shown} x {unit}"


def slot_label(slot: str) -> str:
    """``meal1`` -> ``Meal 1``, ``snack`` -> ``Snack``."""

    cleaned = slot.strip()
    match = _NUMBERED_SLOT_RE.match(cleaned)
    if match:
        return f"{match.group('word').capitalize()} {match.group('number')}"
    words = cleaned.replace("_", " ")
    return words[:1].upper() + words[1:]


__all__ = ["format_amount", "format_number", "format_price", "format_quantity", "slot_label"]
