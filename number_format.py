# -*- coding: utf-8 -*-
"""
Number -> text conversion for ASCII VTK output.

The default rendering reproduces a default-configured C++ output stream
(``%g`` with 6 significant digits), which is what VTS readers and older
files written by the converter expect:

    >>> format_number(2.0)
    '2'
    >>> format_number(1e-7)
    '1e-07'
    >>> format_number(1.5, NumberFormat(scientific=True, precision=3))
    '1.500e+00'
"""
from __future__ import annotations

import numbers
from dataclasses import dataclass


@dataclass(frozen=True)
class NumberFormat:
    """How a single value is rendered.

    scientific -- use exponent notation with ``precision`` digits after the point
    precision  -- significant digits (general) or decimals (scientific)
    no_period  -- drop the first decimal point, e.g. for building file names
    """

    scientific: bool = False
    precision: int = 6
    no_period: bool = False

    def __post_init__(self):
        if int(self.precision) < 0:
            raise ValueError(f"precision must be >= 0, got {self.precision}")

    @property
    def spec(self) -> str:
        kind = "e" if self.scientific else "g"
        return f".{int(self.precision)}{kind}"


DEFAULT_FORMAT = NumberFormat()


def format_number(value, fmt: NumberFormat = DEFAULT_FORMAT) -> str:
    if isinstance(value, bool):
        raise TypeError("bool is not a number to format")
    if isinstance(value, numbers.Integral) and not fmt.scientific:
        text = str(int(value))
    elif isinstance(value, numbers.Real):
        text = format(float(value), fmt.spec)
    else:
        raise TypeError(f"cannot format {type(value).__name__} as a number")
    if fmt.no_period:
        text = text.replace(".", "", 1)
    return text


def formatter(fmt: NumberFormat | None = None):
    """Return a one-argument callable for bulk formatting of float arrays."""
    spec = (fmt or DEFAULT_FORMAT).spec
    if fmt is None or not fmt.no_period:
        return lambda v: format(v, spec)
    return lambda v: format(v, spec).replace(".", "", 1)
