"""Unit tests for the spanning-cell tracker."""

# pylint: disable=missing-class-docstring,missing-function-docstring

from wikitable_extractor.spanning import SpanningCellTracker
from wikitable_extractor.spatial import BLANK, SpanningCell


class TestBlankMode:

    def test_colspan_pads_current_row(self):
        tracker = SpanningCellTracker(blank=True)
        tracker.start_row()
        row = ["a"]
        tracker.open(SpanningCell("a", None, row=0, col=0, rowspan=1, colspan=3))
        tracker.backfill(row, 0)
        assert row == ["a", BLANK, BLANK]
        assert len(tracker) == 0

    def test_rowspan_pads_following_rows_then_expires(self):
        tracker = SpanningCellTracker(blank=True)
        tracker.start_row()
        first = ["a"]
        tracker.open(SpanningCell("a", None, row=0, col=0, rowspan=3, colspan=2))
        tracker.backfill(first, 0)
        assert first == ["a", BLANK]
        assert len(tracker) == 1

        for index in (1, 2):
            tracker.start_row()
            row = []
            tracker.backfill(row, index)
            assert row == [BLANK, BLANK]
        assert len(tracker) == 0
        tracker.start_row()
        assert tracker.active == []

    def test_waits_until_row_reaches_column(self):
        tracker = SpanningCellTracker(blank=True)
        tracker.start_row()
        tracker.open(SpanningCell("b", None, row=0, col=1, rowspan=2, colspan=1))
        tracker.cursor = 1
        tracker.start_row()
        row = []
        tracker.backfill(row, 1)
        assert row == []
        row.append("x")
        tracker.backfill(row, 1)
        assert row == ["x", BLANK]

    def test_inserts_at_cursor_keep_column_order(self):
        tracker = SpanningCellTracker(blank=True)
        tracker.start_row()
        row = ["a"]
        tracker.open(SpanningCell("a", None, row=0, col=0, rowspan=2))
        tracker.backfill(row, 0)
        row.append("b")
        tracker.open(SpanningCell("b", None, row=0, col=1, rowspan=2))
        tracker.backfill(row, 0)
        assert [c.col for c in tracker.active] == [0, 1]


class TestEchoMode:

    def test_echo_repeats_value_and_reports_links(self):
        echoed = []
        tracker = SpanningCellTracker(blank=False)
        tracker.start_row()
        row = ["Paris"]
        tracker.open(SpanningCell("Paris", "Paris", row=0, col=0, rowspan=2, colspan=2))
        tracker.backfill(row, 0, on_link=lambda target, r, c: echoed.append((target, r, c)))
        tracker.start_row()
        next_row = []
        tracker.backfill(next_row, 1, on_link=lambda target, r, c: echoed.append((target, r, c)))
        assert row == ["Paris", "Paris"]
        assert next_row == ["Paris", "Paris"]
        assert echoed == [("Paris", 0, 1), ("Paris", 1, 0), ("Paris", 1, 1)]

    def test_echo_without_link(self):
        echoed = []
        tracker = SpanningCellTracker(blank=False)
        tracker.start_row()
        row = ["v"]
        tracker.open(SpanningCell("v", None, row=0, col=0, colspan=2))
        tracker.backfill(row, 0, on_link=lambda *args: echoed.append(args))
        assert row == ["v", "v"]
        assert echoed == []
