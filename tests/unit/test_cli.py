"""
Unit tests for the clean command line.
"""

import pytest

from src.cli.clean_cli import EXIT_FAILED, build_parser, main


@pytest.mark.unit
class TestParser:
    """Argument parsing"""

    def test_file_source(self):
        args = build_parser().parse_args(["clean", "--input", "products.csv"])

        assert args.input == "products.csv"
        assert args.from_table is False
        assert args.format == "csv"
        assert args.write is False

    def test_table_source(self):
        args = build_parser().parse_args(["clean", "--from-table", "--write", "--db-port", "5433"])

        assert args.from_table is True
        assert args.write is True
        assert args.db_port == 5433

    def test_sources_are_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["clean", "--input", "a.csv", "--from-table"])

    def test_source_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["clean"])

    def test_unsupported_format(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["clean", "--input", "a.xml", "--format", "xml"])


@pytest.mark.unit
class TestMain:
    """Failures that end before any data is read"""

    def test_no_command(self):
        assert main([]) == EXIT_FAILED

    def test_missing_config(self, tmp_path):
        code = main(["clean", "--input", "products.csv", "--config", str(tmp_path / "missing.yaml")])
        assert code == EXIT_FAILED

    def test_invalid_config(self, tmp_path):
        config = tmp_path / "cleaning.yaml"
        config.write_text("defaults:\n  imputed_fields: [brand]\n")

        assert main(["clean", "--input", "products.csv", "--config", str(config)]) == EXIT_FAILED

    def test_path_traversal_rejected(self):
        assert main(["clean", "--input", "../products.csv"]) == EXIT_FAILED

    def test_missing_input_file(self, tmp_path):
        assert main(["clean", "--input", str(tmp_path / "absent.csv")]) == EXIT_FAILED
