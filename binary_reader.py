# -*- coding: utf-8 -*-
"""
Readers for headerless binary files holding a flat array of IEEE-754 floats.

The element width is not stored in the file. ``read_binary`` derives it from
the file length and the expected number of elements (4 bytes -> float32,
8 bytes -> float64); ``read_binary_rows`` assumes float32 and derives the
number of rows from a known number of columns. Both return a read-only
float64 array in file order.
"""
from __future__ import annotations

import os
import sys
from typing import Tuple

import numpy as np


class FormatError(ValueError):
    """File contents do not match the expected element count or width."""


# bytes per element -> numpy kind
_WIDTHS = {4: "f4", 8: "f8"}

_BYTEORDERS = {
    "=": "=", "native": "=",
    "<": "<", "little": "<",
    ">": ">", "big": ">",
}


def endianness() -> str:
    """Byte order of this machine: 'little' or 'big'."""
    return sys.byteorder


def is_big_endian() -> bool:
    return sys.byteorder == "big"


def _dtype(size_value: int, byteorder: str) -> np.dtype:
    try:
        order = _BYTEORDERS[byteorder]
    except KeyError:
        raise ValueError(f"unknown byte order {byteorder!r}") from None
    kind = _WIDTHS.get(size_value)
    if kind is None:
        raise FormatError(
            f"Unknown size of an element ({size_value}) in bytes. Expected one "
            f"is either 4 (single precision) or 8 (double precision)")
    return np.dtype(order + kind)


def _file_length(f) -> int:
    f.seek(0, os.SEEK_END)
    length = f.tell()
    f.seek(0, os.SEEK_SET)
    return length


def _decode(f, path, dtype: np.dtype, count: int) -> np.ndarray:
    nbytes = count * dtype.itemsize
    raw = f.read(nbytes)
    if len(raw) != nbytes:
        raise FormatError(
            f"The number of successfully read bytes from '{path}' ({len(raw)}) "
            f"is different from the expected one ({nbytes})")
    values = np.frombuffer(raw, dtype=dtype, count=count).astype(np.float64)
    values.flags.writeable = False
    return values


def read_binary(path, n_values: int, byteorder: str = "=") -> np.ndarray:
    """Read ``n_values`` floats of 4 or 8 bytes each and widen them to float64.

    Raises OSError if the file can't be opened and FormatError if its length
    is not ``n_values`` elements of a supported width.
    """
    n_values = int(n_values)
    if n_values <= 0:
        raise FormatError(f"The number of elements ({n_values}) should be >0")

    with open(path, "rb") as f:
        length = _file_length(f)
        if length % n_values != 0:
            raise FormatError(
                f"The number of bytes in the file '{path}' ({length}) is not "
                f"divisible by the number of elements {n_values}")
        dtype = _dtype(length // n_values, byteorder)
        return _decode(f, path, dtype, n_values)


def read_binary_rows(path, n_cols: int, byteorder: str = "=") -> Tuple[int, np.ndarray]:
    """Read a float32 table with ``n_cols`` columns; return (n_rows, values)."""
    n_cols = int(n_cols)
    if n_cols <= 0:
        raise FormatError(f"The number of columns ({n_cols}) should be >0")
    dtype = _dtype(4, byteorder)

    with open(path, "rb") as f:
        length = _file_length(f)
        if length % n_cols != 0:
            raise FormatError(
                f"The number of bytes in the file '{path}' ({length}) is not "
                f"divisible by the number of columns {n_cols}")
        if length % dtype.itemsize != 0:
            raise FormatError(
                f"The number of bytes in the file '{path}' ({length}) is not "
                f"divisible by the size of a single value {dtype.itemsize}")
        n_rows = length // dtype.itemsize // n_cols
        if n_rows <= 0:
            raise FormatError(
                f"The number of rows in the file '{path}' ({n_rows}) should be >0")
        # whole rows only
        if n_rows * n_cols * dtype.itemsize != length:
            raise FormatError(
                f"The {length // dtype.itemsize} values in the file '{path}' "
                f"do not fill a whole number of rows of {n_cols} columns")
        return n_rows, _decode(f, path, dtype, n_rows * n_cols)
