"""Utility helpers for the CNY converter.

Разбор введённой суммы, форматирование чисел и расчёт конвертаций.
"""

from __future__ import annotations

import sys
from decimal import Decimal
from typing import Any, Iterable, TextIO

from prettytable import PrettyTable

from .exceptions import AmountParseError
from .models import RateEntry

CNY_LABEL = "人民币 (CNY)"


def parse_amount(value: Any) -> float:
    """Parse user input to float.

    Raises:
        AmountParseError: when the value is not a number
    """
    text = value.strip() if isinstance(value, str) else value
    try:
        return float(text)
    except (TypeError, ValueError) as exc:
        raise AmountParseError(value) from exc


def format_number(value: float) -> str:
    """Shortest round-trip digits in positional form.

    No exponent (5.5e-07 -> 0.00000055) and no trailing '.0' for whole
    numbers.
    """
    s = repr(float(value))
    if "e" in s:
        s = format(Decimal(s), "f")
    if s.endswith(".0"):
        s = s[:-2]
    return s


def convert(amount: float, rate: float) -> tuple[float, float]:
    """Return (amount / rate, amount * rate)."""
    return float(amount) / float(rate), float(amount) * float(rate)


def format_conversion(amount: float, entry: RateEntry) -> str:
    divided, multiplied = convert(amount, entry.rate)
    a = format_number(amount)
    return (
        f"{a} {entry.current_name} = {format_number(divided)} {CNY_LABEL} ---- "
        f"{a} {CNY_LABEL} = {format_number(multiplied)} {entry.current_name}"
    )


def _render_table(amount: float, snapshot: Iterable[RateEntry]) -> str:
    a = format_number(amount)
    table = PrettyTable()
    table.field_names = [
        "Валюта",
        "Курс",
        f"{a} / курс",
        f"{a} * курс",
    ]
    table.align["Валюта"] = "l"
    table.align["Курс"] = "r"
    table.align[f"{a} / курс"] = "r"
    table.align[f"{a} * курс"] = "r"
    for entry in snapshot:
        divided, multiplied = convert(amount, entry.rate)
        table.add_row([
            entry.current_name,
            format_number(entry.rate),
            format_number(divided),
            format_number(multiplied),
        ])
    return table.get_string()


def calculate(
    amount: float,
    snapshot: Iterable[RateEntry],
    out: TextIO | None = None,
    *,
    table: bool = False,
) -> None:
    """Print conversions for every entry of the snapshot.

    Empty snapshot means nothing to show: no output at all.
    """
    entries = list(snapshot)
    if not entries:
        return
    stream = out if out is not None else sys.stdout
    if table:
        stream.write(_render_table(amount, entries) + "\n")
    else:
        for entry in entries:
            stream.write(format_conversion(amount, entry) + "\n")
    stream.write("\n\n")
    stream.flush()
