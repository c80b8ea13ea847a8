"""Tests for the import pipeline: DataFrame loading, metadata and CSV output."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import csv

from conftest import FakeReconciler
from wikitable_extractor.config import ImportOptions
from wikitable_extractor.importer import import_grid, import_wikitext, read_table
from wikitable_extractor.main import wikitext_to_csv
from wikitable_extractor.reader import WikiTableDataReader
from wikitable_extractor.spatial import Grid

PAGE = """{| class="wikitable"
! colspan="2" | City !! Country
|-
| [[Paris]] || 2.1M || [[France]]
|-
| [[Berlin]] || 3.6M || Germany, [[Europe]] and [[Earth]]
|}
"""


def read_csv(path):
    with open(path, encoding="utf-8-sig", newline="") as f:
        return list(csv.reader(f))


class TestReadTable:

    def test_duplicate_and_empty_header_names(self):
        grid = Grid(header=["X", "X", "", "Y"], rows=[["1", "2", "3", "4"]])
        frame, _ = read_table(WikiTableDataReader(grid))
        assert list(frame.columns) == ["X", "X 2", "Column 3", "Y"]

    def test_short_rows_are_padded_and_long_rows_add_columns(self):
        grid = Grid(header=["A"], rows=[["1", "2"], ["3"]])
        frame, _ = read_table(WikiTableDataReader(grid))
        assert list(frame.columns) == ["A", "Column 2"]
        assert frame.iloc[1].tolist() == ["3", None]

    def test_limit(self):
        grid = Grid(header=["A"], rows=[["1"], ["2"], ["3"]])
        frame, _ = read_table(WikiTableDataReader(grid), limit=2)
        assert frame["A"].tolist() == ["1", "2"]

    def test_blank_cells_stay_none(self):
        grid = Grid(header=["A", "B"], rows=[[None, "x"]])
        frame, recon_frame = read_table(WikiTableDataReader(grid))
        assert frame.iloc[0, 0] is None
        assert recon_frame.iloc[0, 1] is None


class TestImportWikitext:

    def test_without_reconciliation(self):
        result = import_wikitext(PAGE, ImportOptions(wiki_base_url="null"))
        assert list(result.frame.columns) == ["City", "City 2", "Country"]
        assert result.frame.values.tolist() == [
            ["Paris", "2.1M", "France"],
            ["Berlin", "3.6M", "Germany, Europe and Earth"],
        ]
        assert result.column_recon == {}
        assert result.recon_frame.isna().all().all()

    def test_reconciled_columns_get_config_and_stats(self):
        fake = FakeReconciler(unknown=["Berlin"])
        result = import_wikitext(PAGE, ImportOptions(batch_size=2), reconciler=fake)
        assert fake.calls == [
            ["https://en.wikipedia.org/wiki/Paris", "https://en.wikipedia.org/wiki/France"],
            ["https://en.wikipedia.org/wiki/Berlin"],
        ]
        assert set(result.column_recon) == {"City", "Country"}
        assert result.column_recon["City"].stats.non_blanks == 1
        assert result.column_recon["City"].stats.matched_topics == 1
        assert result.recon_frame.loc[0, "Country"].entity_id == "Q-France"
        assert result.recon_frame.loc[1, "City"] is None

    def test_injected_reconciler_gets_service_config(self):
        options = ImportOptions(recon_service_url="https://recon.example.org/api")
        result = import_wikitext(PAGE, options, reconciler=FakeReconciler())
        assert result.column_recon["City"].config["service"] == "https://recon.example.org/api"

    def test_explicit_recon_config_is_kept(self):
        result = import_wikitext(PAGE, reconciler=FakeReconciler(), recon_config={"service": "custom"})
        assert result.column_recon["Country"].config == {"service": "custom"}

    def test_import_grid_without_caption(self):
        result = import_grid(Grid(header=["A"], rows=[["1"]]), ImportOptions(wiki_base_url=None))
        assert result.project_name is None
        assert result.frame["A"].tolist() == ["1"]


class TestWikitextToCsv:

    def test_writes_values_and_recon_sidecar(self, tmp_path):
        source = tmp_path / "capitals.wiki"
        source.write_text(PAGE, encoding="utf-8")
        out = tmp_path / "out" / "capitals.csv"
        wikitext_to_csv(str(source), str(out), reconciler=FakeReconciler())
        assert read_csv(out) == [
            ["City", "City 2", "Country"],
            ["Paris", "2.1M", "France"],
            ["Berlin", "3.6M", "Germany, Europe and Earth"],
        ]
        recon = read_csv(tmp_path / "out" / "capitals.recon.csv")
        assert recon[1] == ["Q-Paris", "", "Q-France"]
        assert recon[2] == ["Q-Berlin", "", ""]

    def test_no_sidecar_when_disabled(self, tmp_path):
        source = tmp_path / "capitals.wiki"
        source.write_text(PAGE, encoding="utf-8")
        out = tmp_path / "capitals.csv"
        wikitext_to_csv(str(source), str(out), options=ImportOptions(wiki_base_url="null"))
        assert out.exists()
        assert not (tmp_path / "capitals.recon.csv").exists()


class TestProjectName:

    def test_caption_becomes_project_name(self):
        grid = Grid(caption="Capitals", header=["A"], rows=[["1"]])
        assert import_grid(grid, ImportOptions(wiki_base_url="null")).project_name == "Capitals"

    def test_empty_caption_is_ignored(self):
        grid = Grid(caption="", header=["A"], rows=[["1"]])
        assert import_grid(grid, ImportOptions(wiki_base_url="null")).project_name is None
