"""Unit tests for the pull-based row reader."""

# pylint: disable=missing-class-docstring,missing-function-docstring

from wikitable_extractor.reader import Cell, WikiTableDataReader
from wikitable_extractor.reconcile import ReconResult
from wikitable_extractor.spatial import Grid


class TestWikiTableDataReader:

    def test_header_first_then_rows_then_none(self):
        reader = WikiTableDataReader(Grid(header=["A", "B"], rows=[["1", None], ["3", "4"]]))
        assert reader.next_row() == [Cell("A"), Cell("B")]
        assert reader.next_row() == [Cell("1"), Cell(None)]
        assert reader.next_row() == [Cell("3"), Cell("4")]
        assert reader.next_row() is None
        assert reader.next_row() is None

    def test_recon_attached_to_data_rows(self):
        recon = ReconResult("Q90", "Paris", 100.0)
        grid = Grid(header=["City"], rows=[["Paris"], ["Lyon"]])
        grid.recons = [[recon], [None]]
        rows = list(WikiTableDataReader(grid))
        assert rows[0] == [Cell("City", None)]
        assert rows[1][0].recon is recon
        assert rows[2][0].recon is None

    def test_empty_grid_yields_empty_header(self):
        assert list(WikiTableDataReader(Grid())) == [[]]
