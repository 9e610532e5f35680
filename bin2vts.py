#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Convert a headerless binary array of floats into an ASCII .vts grid.

Examples:
  bin2vts field.bin --nx 200                      # rows inferred, float32 only
  bin2vts field.bin --nx 200 --ny 100 --h 0.5     # 2D XY, float32 or float64
  bin2vts field.bin --nx 200 --nz 100             # 2D XZ
  bin2vts field.bin --nx 64 --ny 64 --nz 32 --hx 1 --hy 1 --hz 2 -o out.vts
"""
from __future__ import annotations

import argparse
import math
import os
import sys
import time
from pathlib import Path

from binary_reader import FormatError, read_binary, read_binary_rows
from vtk_writer import GridSpec, write_vts, write_vts_columns

_BYTEORDER = {"native": "=", "little": "<", "big": ">"}


def convert(input_path, grid, output_path, byteorder="=", fmt=None, h=1.0) -> GridSpec:
    """Read grid.n_cells floats (4 or 8 bytes each) and write them as a .vts grid.

    ``grid`` may also be a column count: the file is then read as a float32
    table with rows inferred and square cells of size ``h``.
    """
    if not isinstance(grid, GridSpec):
        return convert_columns(input_path, grid, output_path, h=h, byteorder=byteorder, fmt=fmt)
    values = read_binary(input_path, grid.n_cells, byteorder)
    write_vts(output_path, grid, values, fmt)
    return grid


def convert_columns(input_path, n_cols, output_path, h=1.0, byteorder="=", fmt=None) -> GridSpec:
    """Read a float32 table of n_cols columns; the row count comes from the file size."""
    n_rows, values = read_binary_rows(input_path, n_cols, byteorder)
    write_vts_columns(output_path, n_cols, n_rows, h, values, fmt)
    return GridSpec.uniform(n_cols, n_rows, h=h)


def output_name(input_path) -> str:
    """<stem>.vts in the current directory."""
    return Path(input_path).stem + ".vts"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="bin2vts",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("input", help="binary file, no header, native byte order by default")
    # grid
    p.add_argument("--nx", "--n1", type=int, required=True, help="number of cells along x (columns)")
    p.add_argument("--ny", "--n2", type=int, default=None, help="number of cells along y")
    p.add_argument("--nz", "--n3", type=int, default=None, help="number of cells along z")
    p.add_argument("--dim",        type=int, choices=[1, 2, 3], default=None,
                   help="grid dimension; checked against the given extents")
    # cell sizes
    p.add_argument("--h",  type=float, default=1.0, help="cell size for every axis")
    p.add_argument("--hx", type=float, default=None)
    p.add_argument("--hy", type=float, default=None)
    p.add_argument("--hz", type=float, default=None)
    # io
    p.add_argument("--byteorder", choices=list(_BYTEORDER), default="native")
    p.add_argument("-o", "--output", default=None, help="output file (default: <input stem>.vts)")
    p.add_argument("-q", "--quiet", action="store_true")
    return p


def _check_args(p: argparse.ArgumentParser, args) -> bool:
    """Validate extents/sizes; return True for column mode (rows inferred)."""
    for name in ("nx", "ny", "nz"):
        n = getattr(args, name)
        if n is not None and n <= 0:
            p.error(f"{name} value ({n}) should be >0")
    for name in ("h", "hx", "hy", "hz"):
        h = getattr(args, name)
        if h is not None and not (math.isfinite(h) and h >= 0):
            p.error(f"{name} value ({h}) should be >=0")

    n_axes = 1 + (args.ny is not None) + (args.nz is not None)
    if args.dim is not None:
        if n_axes > 1 and args.dim != n_axes:
            p.error(f"--dim {args.dim} doesn't match the {n_axes} extents given")
        if n_axes == 1 and args.dim not in (1, 2):
            p.error(f"--dim {args.dim} needs --ny and --nz")

    columns = n_axes == 1 and args.dim != 1
    if columns and any(h is not None for h in (args.hx, args.hy, args.hz)):
        p.error("--hx/--hy/--hz need --ny or --nz; use --h for square cells")
    return columns


def main(argv=None) -> int:
    p = build_parser()
    args = p.parse_args(argv)
    columns = _check_args(p, args)
    say = (lambda *a, **k: None) if args.quiet else print

    byteorder = _BYTEORDER[args.byteorder]
    vtsfile = args.output or output_name(args.input)
    t0 = time.perf_counter()
    try:
        if columns:
            grid = convert(args.input, args.nx, vtsfile, byteorder=byteorder, h=args.h)
        else:
            h = args.h
            grid = GridSpec(args.nx, args.ny, args.nz,
                            h if args.hx is None else args.hx,
                            h if args.hy is None else args.hy,
                            h if args.hz is None else args.hz)
            convert(args.input, grid, vtsfile, byteorder=byteorder)
    except (OSError, FormatError) as e:
        print(f"[error] {e}", file=sys.stderr)
        return 1
    t1 = time.perf_counter()

    width = os.path.getsize(args.input) // grid.n_cells
    say(f"[read] {args.input}: {grid.n_cells} values x {width} bytes")
    say(f"[grid] {grid.plane} nx={grid.nx}, ny={grid.ny}, nz={grid.nz}; "
        f"hx={grid.hx:g}, hy={grid.hy:g}, hz={grid.hz:g}")
    say(f"[time] conversion took {t1 - t0:.3f} s")
    say(f"Saved: {vtsfile}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
