import pytest
from unittest.mock import patch
import json
from csv2json import main, parse_args

def test_parse_args_defaults():
    args = parse_args([])
    assert args.source == "customer-data.csv"
    assert args.output == "customer-data.json"
    assert args.delimiter == ","
    assert args.encoding == "utf-8-sig"

def test_parse_args_positionals_and_options():
    args = parse_args(["in.csv", "out.json", "--delimiter", ";", "--encoding", "latin-1"])
    assert args.source == "in.csv"
    assert args.output == "out.json"
    assert args.delimiter == ";"
    assert args.encoding == "latin-1"

@patch("csv2json.CsvConverter")
def test_main_builds_config(mock_converter):
    """Command-line arguments are passed through to the converter config."""
    assert main(["custom.csv", "custom.json", "--delimiter", "|"]) == 0

    config = mock_converter.call_args[0][0]
    assert config.input_path == "custom.csv"
    assert config.output_path == "custom.json"
    assert config.delimiter == "|"
    assert config.base_dir is None
    mock_converter.return_value.convert.assert_called_once_with()

def test_main_converts_next_to_program(tmp_path, capsys):
    (tmp_path / "customer-data.csv").write_text("id,name\n1,Ada\n", encoding="utf-8")

    with patch("csv_converter.BASE_DIR", tmp_path):
        status = main([])

    assert status == 0
    assert json.loads((tmp_path / "customer-data.json").read_text(encoding="utf-8")) == [{"id": "1", "name": "Ada"}]
    assert capsys.readouterr().out == "Converting: customer-data.csv into customer-data.json\nDone!\n"

def test_main_failure_still_exits_zero(tmp_path, capsys):
    """A failed conversion is reported on stderr without a non-zero status."""
    with patch("csv_converter.BASE_DIR", tmp_path):
        status = main(["doesnt-exist.csv", "wont-be-written.json"])

    assert status == 0
    assert not (tmp_path / "wont-be-written.json").exists()
    captured = capsys.readouterr()
    assert captured.out == "Converting: doesnt-exist.csv into wont-be-written.json\n"
    assert captured.err.startswith("Got error: Source file not found")

def test_help_exits_cleanly(capsys):
    with pytest.raises(SystemExit) as exc:
        parse_args(["--help"])
    assert exc.value.code == 0
    assert "customer-data.csv" in capsys.readouterr().out

def test_main_unknown_encoding_is_reported(tmp_path, capsys):
    (tmp_path / "customer-data.csv").write_text("id\n1\n", encoding="utf-8")

    with patch("csv_converter.BASE_DIR", tmp_path):
        status = main(["--encoding", "nope"])

    assert status == 0
    assert not (tmp_path / "customer-data.json").exists()
    assert capsys.readouterr().err.startswith("Got error: Could not parse")

def test_parse_args_no_trim():
    assert parse_args([]).trim is True
    assert parse_args(["--no-trim"]).trim is False
