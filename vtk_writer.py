# -*- coding: utf-8 -*-
"""
ASCII VTK XML StructuredGrid (.vts) writer for uniform cell grids.

Cells are stored in the flat value buffer with x varying fastest, then y,
then z. Points are the cell corners: (n+1) per active axis, vertex
coordinate = index * cell size. An axis the grid does not use has a single
vertex at 0.0 and extent "1 1".
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from binary_reader import FormatError
from number_format import NumberFormat, formatter


@dataclass(frozen=True)
class GridSpec:
    nx: int
    ny: Optional[int] = None
    nz: Optional[int] = None
    hx: float = 1.0
    hy: float = 1.0
    hz: float = 1.0

    def __post_init__(self):
        if self.nx is None:
            raise ValueError("nx is required")
        for name in ("nx", "ny", "nz"):
            n = getattr(self, name)
            if n is None:
                continue
            if int(n) != n:
                raise ValueError(f"{name} value ({n}) should be a whole number")
            if n <= 0:
                raise ValueError(f"{name} value ({n}) should be >0")
        for name in ("hx", "hy", "hz"):
            h = float(getattr(self, name))
            if not math.isfinite(h) or h < 0.0:
                raise ValueError(f"{name} value ({h}) should be >=0")

    @classmethod
    def uniform(cls, nx, ny=None, nz=None, h=1.0) -> "GridSpec":
        """Square/cubic cells of size h along every axis."""
        return cls(nx, ny, nz, h, h, h)

    @property
    def dimension(self) -> int:
        return 1 + (self.ny is not None) + (self.nz is not None)

    @property
    def plane(self) -> str:
        """Active axes, e.g. 'xy', 'xz', 'xyz' or 'x'."""
        return "x" + ("y" if self.ny is not None else "") + ("z" if self.nz is not None else "")

    @property
    def shape(self) -> Tuple[int, int, int]:
        """Cell counts from slowest to fastest axis: (z, y, x)."""
        return int(self.nz or 1), int(self.ny or 1), int(self.nx)

    @property
    def n_cells(self) -> int:
        nz, ny, nx = self.shape
        return nz * ny * nx

    @property
    def n_points(self) -> int:
        n = 1
        for m in (self.nx, self.ny, self.nz):
            n *= (int(m) + 1) if m is not None else 1
        return n

    @property
    def extent(self) -> Tuple[int, int, int, int, int, int]:
        ext = []
        for m in (self.nx, self.ny, self.nz):
            ext += [1, int(m) + 1 if m is not None else 1]
        return tuple(ext)


def _axis_coords(n, h, num) -> List[str]:
    if n is None:
        return ["0.0"]
    return [num(v) for v in (np.arange(int(n) + 1, dtype=np.float64) * float(h)).tolist()]


def _write_scalars(f, name, rows, num):
    f.write(f'        <DataArray type="Float64" Name="{name}" format="ascii" NumberOfComponents="1">\n')
    for row in rows:
        f.write(" ".join(map(num, row.tolist())) + " ")
    f.write("\n")
    f.write("        </DataArray>\n")


def _write_points(f, grid: GridSpec, num):
    xs = _axis_coords(grid.nx, grid.hx, num)
    ys = _axis_coords(grid.ny, grid.hy, num)
    zs = _axis_coords(grid.nz, grid.hz, num)
    f.write('        <DataArray type="Float64" format="ascii" NumberOfComponents="3">\n')
    for z in zs:
        for y in ys:
            f.write("".join(f"{x} {y} {z} " for x in xs))
    f.write("\n")
    f.write("        </DataArray>\n")


def write_vts(path, grid: GridSpec, values, fmt: Optional[NumberFormat] = None):
    """Write ``values`` (one per cell, x fastest) as a .vts file at ``path``."""
    values = np.asarray(values, dtype=np.float64).reshape(-1)
    if values.size != grid.n_cells:
        raise FormatError(
            f"{values.size} values don't fit a {grid.plane} grid of "
            f"{grid.n_cells} cells (nx={grid.nx}, ny={grid.ny}, nz={grid.nz})")
    num = formatter(fmt)
    ext = " ".join(str(e) for e in grid.extent)
    with open(path, "w", encoding="utf-8") as f:
        f.write('<?xml version="1.0"?>\n')
        f.write('<VTKFile type="StructuredGrid" version="0.1">\n')
        f.write(f'  <StructuredGrid WholeExtent="{ext}">\n')
        f.write(f'    <Piece Extent="{ext}">\n')
        f.write("      <CellData>\n")
        _write_scalars(f, "data", values.reshape(-1, int(grid.nx)), num)
        f.write("      </CellData>\n")
        f.write("      <Points>\n")
        _write_points(f, grid, num)
        f.write("      </Points>\n")
        f.write("    </Piece>\n")
        f.write("  </StructuredGrid>\n")
        f.write("</VTKFile>\n")


# ---------- fixed-layout variants ----------
def _pick(h_axis, h):
    return h if h_axis is None else h_axis


def write_vts_columns(path, n_cols, n_rows, h, values, fmt=None):
    """Table of n_rows x n_cols square cells in the XY plane."""
    write_vts(path, GridSpec.uniform(n_cols, n_rows, h=h), values, fmt)


def write_vts_2d_xy(path, nx, ny, values, h=1.0, hx=None, hy=None, fmt=None):
    grid = GridSpec(nx, ny=ny, hx=_pick(hx, h), hy=_pick(hy, h), hz=h)
    write_vts(path, grid, values, fmt)


def write_vts_2d_xz(path, nx, nz, values, h=1.0, hx=None, hz=None, fmt=None):
    """XZ-plane grid; every vertex has y = 0."""
    grid = GridSpec(nx, nz=nz, hx=_pick(hx, h), hy=h, hz=_pick(hz, h))
    write_vts(path, grid, values, fmt)


def write_vts_3d(path, nx, ny, nz, values, h=1.0, hx=None, hy=None, hz=None, fmt=None):
    grid = GridSpec(nx, ny, nz, _pick(hx, h), _pick(hy, h), _pick(hz, h))
    write_vts(path, grid, values, fmt)
