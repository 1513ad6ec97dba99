"""
Python model of the calculator widget's keypad logic.

Mirrors the client-side script shipped in widget.py key for key, so the
widget's arithmetic can be exercised without a browser:

    >>> pad = Keypad()
    >>> pad.press_sequence("2+3+4=")
    '9'

Operators chain left to right with no precedence, a second decimal point in
the same operand is ignored, and dividing by zero gives 0. Every state
change records a notification shaped like the ``postMessage`` payload the
widget sends to its host.
"""

from __future__ import annotations

import math
import re
from typing import Any, Dict, List, Optional

from config import iso_timestamp

DIGITS = "0123456789"
OPERATORS = "+-*/"

# Button labels as drawn on the widget.
KEY_ALIASES = {"÷": "/", "×": "*", "−": "-", "c": "C"}

_FLOAT_PREFIX = re.compile(r"^\s*[+-]?(?:Infinity|\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?)")


def parse_float(text: str) -> float:
    """Like JavaScript's parseFloat: parse the longest numeric prefix, else NaN."""
    match = _FLOAT_PREFIX.match(text)
    if not match:
        return math.nan
    return float(match.group(0).replace("Infinity", "inf"))


def format_number(value: float) -> str:
    """Like JavaScript's Number.prototype.toString for finite and special values."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    mantissa, _, exp = repr(abs(value)).partition("e")
    whole, _, frac = mantissa.partition(".")
    if frac == "0":
        frac = ""
    raw = whole + frac
    digits = raw.lstrip("0")
    # value == 0.<digits> * 10**point
    point = len(whole) + int(exp or 0) - (len(raw) - len(digits))
    digits = digits.rstrip("0")
    k = len(digits)

    if k <= point <= 21:
        body = digits + "0" * (point - k)
    elif 0 < point <= 21:
        body = digits[:point] + "." + digits[point:]
    elif -6 < point <= 0:
        body = "0." + "0" * (-point) + digits
    else:
        e = point - 1
        e_text = f"e+{e}" if e >= 0 else f"e-{-e}"
        body = digits[0] + ("." + digits[1:] if k > 1 else "") + e_text
    return sign + body


class Keypad:
    def __init__(self):
        self.notifications: List[Dict[str, Any]] = []
        self._reset_state()

    def _reset_state(self) -> None:
        self.current_value = "0"
        self.previous_value = ""
        self.operation: Optional[str] = None
        self.should_reset_display = False

    @property
    def display(self) -> str:
        return self.current_value

    # ---- Key handling ----

    def press(self, key: str) -> str:
        """Press one key and return the display afterwards."""
        key = KEY_ALIASES.get(key, key)
        if key in DIGITS or key == ".":
            self.append_number(key)
        elif key in OPERATORS:
            self.append_operator(key)
        elif key == "=":
            self.calculate()
        elif key == "C":
            self.clear()
        else:
            raise ValueError(f"Unknown calculator key: {key!r}")
        return self.display

    def press_sequence(self, keys: str) -> str:
        for key in keys:
            if not key.isspace():
                self.press(key)
        return self.display

    def append_number(self, num: str) -> None:
        if self.should_reset_display:
            self.current_value = num
            self.should_reset_display = False
        elif self.current_value == "0" and num != ".":
            self.current_value = num
        elif num == "." and "." in self.current_value:
            return
        else:
            self.current_value += num
        self._notify("number", self.current_value)

    def append_operator(self, op: str) -> None:
        if self.operation is not None and not self.should_reset_display:
            self.calculate()
        self.previous_value = self.current_value
        self.operation = op
        self.should_reset_display = True
        self._notify("operator", op)

    def calculate(self) -> None:
        if self.operation is None or self.should_reset_display:
            return

        prev = parse_float(self.previous_value)
        current = parse_float(self.current_value)

        if self.operation == "+":
            result = prev + current
        elif self.operation == "-":
            result = prev - current
        elif self.operation == "*":
            result = prev * current
        elif self.operation == "/":
            result = prev / current if current != 0 else 0
        else:
            return

        self.current_value = format_number(float(result))
        self.operation = None
        self.should_reset_display = True
        self._notify("result", self.current_value)

    def clear(self) -> None:
        self._reset_state()
        self._notify("clear", "0")

    def _notify(self, action: str, value: str) -> None:
        self.notifications.append({
            "type": "calculator",
            "action": action,
            "value": value,
            "timestamp": iso_timestamp(),
        })
