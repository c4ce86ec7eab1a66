"""
Scale notation: converting between scale factors and strings such as "1:87".

Accepted input forms (whitespace is ignored, "," may be used as decimal mark):

    1:87     ratio, model size : real size
    1/87     fraction
    50%      percentage
    2x       multiplier
    0.5      plain factor

Factors format as "1:N" when smaller than one, "N:1" when larger and "1:1"
otherwise.
"""
from __future__ import annotations

import math
import re
from typing import Optional, Union

_NUMBER = r"\d+(?:\.\d*)?|\.\d+"
_RATIO_RE = re.compile(rf"^({_NUMBER})[:/]({_NUMBER})$")
_PERCENT_RE = re.compile(rf"^({_NUMBER})%$")
_MULTIPLIER_RE = re.compile(rf"^({_NUMBER})[x×]$", re.IGNORECASE)
_PLAIN_RE = re.compile(rf"^({_NUMBER}|\d+(?:\.\d*)?[eE][-+]?\d+)$")


def parse_scale(text: str) -> float:
    """Parse scale notation into a positive factor.

    Raises:
        ValueError: The text is not valid notation or does not denote a
            positive finite factor.
    """
    s = re.sub(r"\s+", "", str(text)).replace(",", ".")
    factor: Optional[float] = None

    m = _RATIO_RE.match(s)
    if m:
        numerator, denominator = float(m.group(1)), float(m.group(2))
        if denominator == 0:
            raise ValueError(f"Invalid scale {text!r}: zero denominator")
        factor = numerator / denominator
    elif _PERCENT_RE.match(s):
        factor = float(s[:-1]) / 100.0
    elif _MULTIPLIER_RE.match(s):
        factor = float(s[:-1])
    elif _PLAIN_RE.match(s):
        factor = float(s)

    if factor is None:
        raise ValueError(f"Invalid scale notation: {text!r}")
    if not (math.isfinite(factor) and factor > 0):
        raise ValueError(f"Scale must be positive: {text!r}")
    return factor


def _format_number(value: float, precision: int) -> str:
    out = f"{value:.{precision}f}"
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    return out


def format_scale(factor: float, precision: int = 3) -> str:
    """Format a factor, e.g. 0.011494252873563218 -> "1:87"."""
    factor = float(factor)
    if not (math.isfinite(factor) and factor > 0):
        raise ValueError(f"Scale must be positive, got {factor!r}")
    if factor < 1:
        denominator = _format_number(1.0 / factor, precision)
        if denominator != "1":
            return f"1:{denominator}"
    elif factor > 1:
        numerator = _format_number(factor, precision)
        if numerator != "1":
            return f"{numerator}:1"
    return "1:1"


class Scale:
    """
    A scale factor paired with its notation.

    `Scale("1:87")` parses notation, `Scale(0.0115)` wraps a factor. Invalid
    input does not raise; check `valid` instead.
    """

    def __init__(self, value: Union[str, float, int], precision: int = 3) -> None:
        self.precision = precision
        self.source = value
        self.factor: Optional[float]
        if isinstance(value, str):
            try:
                self.factor = parse_scale(value)
            except ValueError:
                self.factor = None
        else:
            f = float(value)
            self.factor = f if math.isfinite(f) and f > 0 else None

    @property
    def valid(self) -> bool:
        return self.factor is not None

    def __str__(self) -> str:
        if self.factor is None:
            return ""
        return format_scale(self.factor, self.precision)

    def __repr__(self) -> str:
        return f"Scale({str(self)!r})" if self.valid else f"Scale(invalid: {self.source!r})"

    def __float__(self) -> float:
        if self.factor is None:
            raise ValueError(f"Invalid scale: {self.source!r}")
        return self.factor
