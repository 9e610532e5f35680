# -*- coding: utf-8 -*-
"""Read back an ASCII .vts file written by vtk_writer, for verification."""
from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from binary_reader import FormatError


@dataclass
class VTSContent:
    extent: Tuple[int, int, int, int, int, int]
    data: np.ndarray    # (n_cells,)
    points: np.ndarray  # (n_points, 3)

    @property
    def cell_shape(self) -> Tuple[int, int, int]:
        """(nz, ny, nx); an axis with extent "1 1" counts as one cell layer."""
        e = self.extent
        return tuple(max(e[2*a + 1] - e[2*a], 1) for a in (2, 1, 0))

    @property
    def point_shape(self) -> Tuple[int, int, int]:
        e = self.extent
        return tuple(e[2*a + 1] - e[2*a] + 1 for a in (2, 1, 0))


def _floats(el) -> np.ndarray:
    return np.array((el.text or "").split(), dtype=np.float64)


def load_vts(path) -> VTSContent:
    root = ET.parse(path).getroot()
    grid = root.find("StructuredGrid")
    if root.tag != "VTKFile" or root.get("type") != "StructuredGrid" or grid is None:
        raise FormatError(f"'{path}' is not a VTK StructuredGrid file")

    try:
        extent = tuple(int(t) for t in grid.get("WholeExtent", "").split())
    except ValueError:
        raise FormatError(f"bad WholeExtent in '{path}': {grid.get('WholeExtent')!r}") from None
    if len(extent) != 6:
        raise FormatError(f"bad WholeExtent in '{path}': {grid.get('WholeExtent')!r}")

    piece = grid.find("Piece")
    if piece is None:
        raise FormatError(f"no Piece in '{path}'")
    data_el = piece.find("CellData/DataArray[@Name='data']")
    if data_el is None:
        raise FormatError(f"no CellData array 'data' in '{path}'")
    pts_el = piece.find("Points/DataArray")
    if pts_el is None:
        raise FormatError(f"no Points array in '{path}'")

    out = VTSContent(extent, _floats(data_el), np.empty((0, 3)))
    raw_pts = _floats(pts_el)
    n_cells = int(np.prod(out.cell_shape))
    n_points = int(np.prod(out.point_shape))
    if out.data.size != n_cells:
        raise FormatError(f"{out.data.size} cell values in '{path}', extent needs {n_cells}")
    if raw_pts.size != 3 * n_points:
        raise FormatError(f"{raw_pts.size // 3} points in '{path}', extent needs {n_points}")
    out.points = raw_pts.reshape(-1, 3)
    return out
