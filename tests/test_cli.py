"""Tests for the command-line interface."""

import json

from catalog_search.cli import load_catalog, main, sample_catalog


class TestSampleCatalog:
    """Tests for the built-in catalog."""

    def test_sample_catalog_is_valid(self):
        catalog = sample_catalog()

        assert len(catalog) == 6
        assert catalog[0].id == "sr-42u-smart"
        assert catalog[0].price == 2450.0


class TestSearchCommand:
    """Tests for `catalog-search search`."""

    def test_search_sample_catalog(self, capsys):
        exit_code = main(["search", "smart rack", "--limit", "1"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "SR-42U Smart Rack (sr-42u-smart)" in out
        assert "1 result(s)" in out

    def test_search_catalog_file(self, tmp_path, capsys):
        catalog_file = tmp_path / "catalog.json"
        catalog_file.write_text(
            json.dumps(
                [
                    {"id": "a", "name": "Blue Rack", "description": "One"},
                    {"id": "b", "name": "Red Shelf", "description": "Two"},
                ]
            )
        )

        exit_code = main(["search", "rack", "--catalog", str(catalog_file)])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "Blue Rack (a)" in out
        assert "Red Shelf" not in out

    def test_no_matches(self, capsys):
        exit_code = main(["search", "zzzzzz"])

        assert exit_code == 0
        assert "No matching products." in capsys.readouterr().out

    def test_browse_mode_lists_everything(self, capsys):
        main(["search", ""])

        assert "6 result(s)" in capsys.readouterr().out

    def test_bad_catalog_file(self, tmp_path, capsys):
        catalog_file = tmp_path / "catalog.json"
        catalog_file.write_text(json.dumps({"not": "a list"}))

        exit_code = main(["search", "rack", "--catalog", str(catalog_file)])

        assert exit_code == 1
        assert "Could not load catalog" in capsys.readouterr().err

    def test_catalog_file_with_numeric_ids(self, tmp_path, capsys):
        catalog_file = tmp_path / "catalog.json"
        catalog_file.write_text(
            json.dumps([{"id": 42, "name": "Smart Rack", "description": "A rack"}])
        )

        exit_code = main(["search", "rack", "--catalog", str(catalog_file)])

        assert exit_code == 0
        assert "Smart Rack (42)" in capsys.readouterr().out

    def test_missing_catalog_file(self, tmp_path, capsys):
        exit_code = main(["search", "rack", "--catalog", str(tmp_path / "missing.json")])

        assert exit_code == 1


class TestExampleCommand:
    """Tests for `catalog-search example`."""

    def test_example_round_trips_through_load_catalog(self, tmp_path, capsys):
        main(["example"])
        catalog_file = tmp_path / "catalog.json"
        catalog_file.write_text(capsys.readouterr().out)

        catalog = load_catalog(str(catalog_file))

        assert [p.id for p in catalog] == [p.id for p in sample_catalog()]


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out
