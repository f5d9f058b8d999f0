"""Tests for scripts/render_overlay.py — argument parsing and end-to-end rendering."""

import sys

import pytest
from lxml import etree

from overlay_core.errors import OverlayError
from overlay_core.types import Range
from scripts.render_overlay import load_text_records, main, parse_selection

SVG = "{http://www.w3.org/2000/svg}"


class TestParseSelection:
    def test_no_arguments(self):
        assert parse_selection([], 3) is None

    def test_fills_unconstrained_dimensions(self):
        selection = parse_selection(["0:1:2", "2:0:5"], 3)
        assert selection.ranges == (Range(1.0, 2.0), None, Range(0.0, 5.0))

    @pytest.mark.parametrize("arg", ["0:1", "x:1:2", "5:0:1", "-1:0:1", "0:2:1"])
    def test_invalid(self, arg):
        with pytest.raises(OverlayError):
            parse_selection([arg], 3)


class TestLoadTextRecords:
    def test_csv_with_score(self, tmp_path):
        path = tmp_path / "points.csv"
        path.write_text("0,0,1\n1,2,3\n")
        store, annotation = load_text_records(str(path), score_last=True)
        assert store.dimensionality() == 2
        assert annotation.value_for(1) == 3.0

    def test_whitespace_without_score(self, tmp_path):
        path = tmp_path / "points.txt"
        path.write_text("0 0 1\n1 2 3\n")
        store, annotation = load_text_records(str(path), score_last=False)
        assert store.dimensionality() == 3
        assert annotation is None

    def test_score_needs_feature_column(self, tmp_path):
        path = tmp_path / "scores.csv"
        path.write_text("1\n2\n")
        with pytest.raises(OverlayError):
            load_text_records(str(path), score_last=True)


class TestMain:
    def _run(self, monkeypatch, *argv):
        monkeypatch.setattr(sys, "argv", ["render_overlay.py", *argv])
        main()

    def test_renders_bubbles_and_cube(self, tmp_path, monkeypatch):
        data = tmp_path / "points.csv"
        data.write_text("0,0,1\n1,2,3\n2,1,2\n")
        out = tmp_path / "plot.svg"

        self._run(monkeypatch, str(data), "--score-last", "--select", "0:0:1", "--output", str(out))

        root = etree.fromstring(out.read_bytes())
        assert len(root.findall(f".//{SVG}circle")) == 3
        assert len(root.findall(f".//{SVG}polygon")) == 1

    def test_thumbnail(self, tmp_path, monkeypatch):
        data = tmp_path / "points.csv"
        data.write_text("0,0,1\n1,2,3\n")
        out = tmp_path / "plot.svg"

        self._run(monkeypatch, str(data), "--score-last", "--thumbnail", "16", "--output", str(out))

        root = etree.fromstring(out.read_bytes())
        assert root.find(f".//{SVG}g[@data-resolution='16']") is not None

    def test_bad_gamma_exits(self, tmp_path, monkeypatch):
        data = tmp_path / "points.csv"
        data.write_text("0,0,1\n1,2,3\n")
        with pytest.raises(SystemExit) as exc:
            self._run(monkeypatch, str(data), "--score-last", "--gamma", "0")
        assert exc.value.code == 1

    def test_zero_thumbnail_resolution_exits(self, tmp_path, monkeypatch):
        data = tmp_path / "points.csv"
        data.write_text("0,0,1\n1,2,3\n")
        out = tmp_path / "plot.svg"
        with pytest.raises(SystemExit) as exc:
            self._run(monkeypatch, str(data), "--score-last", "--thumbnail", "0", "--output", str(out))
        assert exc.value.code == 1
        assert not out.exists()
