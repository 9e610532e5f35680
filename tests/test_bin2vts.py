import pytest

np = pytest.importorskip("numpy")

import bin2vts
from binary_reader import FormatError
from vtk_writer import GridSpec
from vts_check import load_vts


def _dump(path, arr):
    with open(path, "wb") as f:
        f.write(np.asarray(arr).tobytes())
    return str(path)


def test_output_name_uses_stem():
    assert bin2vts.output_name("runs/field.bin") == "field.vts"
    assert bin2vts.output_name("runs/field.v2.bin") == "field.v2.vts"
    assert bin2vts.output_name("noext") == "noext.vts"


def test_convert_3d(tmp_path):
    vals = np.arange(24, dtype=np.float64)
    src = _dump(tmp_path / "cube.bin", vals)
    out = tmp_path / "cube.vts"
    grid = bin2vts.convert(src, GridSpec(4, 3, 2, 1.0, 1.0, 0.5), out)
    content = load_vts(out)
    assert grid.n_cells == 24
    assert content.extent == (1, 5, 1, 4, 1, 3)
    assert np.array_equal(content.data, vals)
    assert content.points[-1].tolist() == [4.0, 3.0, 1.0]


def test_convert_columns_infers_rows(tmp_path):
    vals = np.arange(15, dtype=np.float32) / 4
    src = _dump(tmp_path / "tab.bin", vals)
    out = tmp_path / "tab.vts"
    grid = bin2vts.convert_columns(src, 5, out, h=2.0)
    assert (grid.nx, grid.ny) == (5, 3)
    content = load_vts(out)
    assert content.extent == (1, 6, 1, 4, 1, 1)
    assert np.array_equal(content.data, vals.astype(np.float64))
    assert content.points[-1].tolist() == [10.0, 6.0, 0.0]


def test_convert_size_mismatch(tmp_path):
    src = _dump(tmp_path / "a.bin", np.zeros(5, dtype=np.float64))
    with pytest.raises(FormatError):
        bin2vts.convert(src, GridSpec(2, 3), tmp_path / "a.vts")
    assert not (tmp_path / "a.vts").exists()


# ---------- command line ----------
def test_main_default_output_in_cwd(tmp_path, monkeypatch, capsys):
    src = _dump(tmp_path / "field.bin", np.arange(6, dtype=np.float32))
    monkeypatch.chdir(tmp_path)
    assert bin2vts.main([src, "--nx", "3"]) == 0
    out = capsys.readouterr().out
    assert "[read]" in out and "x 4 bytes" in out
    assert "[grid] xy nx=3, ny=2" in out
    assert "Saved: field.vts" in out
    assert load_vts(tmp_path / "field.vts").extent == (1, 4, 1, 3, 1, 1)


def test_main_xz_plane_with_per_axis_sizes(tmp_path, capsys):
    src = _dump(tmp_path / "s.bin", np.ones(6))
    out = tmp_path / "s.vts"
    rc = bin2vts.main([src, "--nx", "2", "--nz", "3", "--hx", "0.5", "--hz", "2", "-o", str(out)])
    assert rc == 0
    content = load_vts(out)
    assert content.extent == (1, 3, 1, 1, 1, 4)
    assert content.points[-1].tolist() == [1.0, 0.0, 6.0]
    assert "x 8 bytes" in capsys.readouterr().out


def test_main_one_dimensional(tmp_path):
    src = _dump(tmp_path / "l.bin", np.ones(4, dtype=np.float32))
    out = tmp_path / "l.vts"
    assert bin2vts.main([src, "--nx", "4", "--dim", "1", "-o", str(out), "-q"]) == 0
    assert load_vts(out).extent == (1, 5, 1, 1, 1, 1)


def test_main_quiet(tmp_path, capsys):
    src = _dump(tmp_path / "q.bin", np.ones(4, dtype=np.float32))
    assert bin2vts.main([src, "--nx", "2", "--ny", "2", "-o", str(tmp_path / "q.vts"), "--quiet"]) == 0
    assert capsys.readouterr().out == ""


def test_main_big_endian_input(tmp_path):
    vals = np.array([1.0, 2.5, -4.0, 8.0])
    src = _dump(tmp_path / "be.bin", vals.astype(">f8"))
    out = tmp_path / "be.vts"
    assert bin2vts.main([src, "--nx", "2", "--ny", "2", "--byteorder", "big", "-o", str(out), "-q"]) == 0
    assert load_vts(out).data.tolist() == vals.tolist()


def test_main_reports_format_error(tmp_path, capsys):
    src = _dump(tmp_path / "bad.bin", np.ones(5, dtype=np.float32))
    rc = bin2vts.main([src, "--nx", "2", "--ny", "2", "-o", str(tmp_path / "bad.vts")])
    assert rc == 1
    err = capsys.readouterr().err
    assert err.startswith("[error]")


def test_main_reports_missing_input(tmp_path, capsys):
    rc = bin2vts.main([str(tmp_path / "missing.bin"), "--nx", "2", "-o", str(tmp_path / "m.vts")])
    assert rc == 1
    assert "[error]" in capsys.readouterr().err


@pytest.mark.parametrize("argv", [
    ["--nx", "0"],
    ["--nx", "2", "--ny", "-1"],
    ["--nx", "2", "--h", "-1"],
    ["--nx", "2", "--ny", "2", "--dim", "3"],
    ["--nx", "2", "--ny", "2", "--nz", "2", "--dim", "2"],
    ["--nx", "2", "--dim", "3"],
    ["--nx", "2", "--hx", "0.5"],
    ["--nx", "2", "--ny", "2", "--h", "nan"],
    ["--nx", "2", "--ny", "2", "--hz", "inf"],
    ["--nx", "2", "--h", "inf"],
    [],
])
def test_main_usage_errors(tmp_path, argv):
    src = _dump(tmp_path / "u.bin", np.ones(8, dtype=np.float32))
    with pytest.raises(SystemExit) as exc:
        bin2vts.main([src] + argv)
    assert exc.value.code == 2


def test_main_dim_consistent(tmp_path):
    src = _dump(tmp_path / "d.bin", np.ones(8, dtype=np.float32))
    out = tmp_path / "d.vts"
    assert bin2vts.main([src, "--nx", "2", "--ny", "2", "--nz", "2", "--dim", "3", "-o", str(out), "-q"]) == 0
    assert load_vts(out).extent == (1, 3, 1, 3, 1, 3)


def test_convert_with_column_count(tmp_path):
    vals = np.arange(6, dtype=np.float32)
    src = _dump(tmp_path / "c.bin", vals)
    out = tmp_path / "c.vts"
    grid = bin2vts.convert(src, 2, out, h=0.5)
    assert (grid.nx, grid.ny, grid.hx) == (2, 3, 0.5)
    content = load_vts(out)
    assert content.extent == (1, 3, 1, 4, 1, 1)
    assert content.points[-1].tolist() == [1.0, 1.5, 0.0]
