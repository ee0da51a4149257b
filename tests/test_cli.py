import pytest

from apicula.cli import parse_cli_args, subcommand_help_text, usage_text
from apicula.cli_parse import UsageError


def test_extract(tmp_path):
    out = str(tmp_path / "out")
    args = parse_cli_args(["extract", "rom.nds", "-o", out])
    assert args.subcommand == "extract"
    assert args.free_args == ["rom.nds"]
    assert args.get_opt("output") == out


def test_aliases(tmp_path):
    out = str(tmp_path / "out")
    assert parse_cli_args(["x", "rom.nds", "-o", out]).subcommand == "extract"
    assert parse_cli_args(["v", "a.nsbmd"]).subcommand == "view"
    assert parse_cli_args(["i", "a.nsbmd"]).subcommand == "info"
    assert parse_cli_args(["c", "a.nsbmd", "-o", out]).subcommand == "convert"


def test_extract_needs_exactly_one_input(tmp_path):
    out = str(tmp_path / "out")
    with pytest.raises(UsageError, match="pass the file"):
        parse_cli_args(["extract", "-o", out])
    with pytest.raises(UsageError, match="too many input files"):
        parse_cli_args(["extract", "a", "b", "-o", out])


def test_output_required():
    with pytest.raises(UsageError, match="--output"):
        parse_cli_args(["convert", "a.nsbmd"])


def test_existing_output_needs_overwrite(tmp_path):
    with pytest.raises(UsageError, match="already exists"):
        parse_cli_args(["convert", "a.nsbmd", "-o", str(tmp_path)])
    args = parse_cli_args(["convert", "a.nsbmd", "-o", str(tmp_path), "--overwrite"])
    assert "overwrite" in args.flags


def test_convert_format(tmp_path):
    out = str(tmp_path / "out")
    args = parse_cli_args(["convert", "a.nsbmd", "-o", out, "-f", "glb"])
    assert args.get_opt("format") == "glb"
    with pytest.raises(UsageError, match="bad output format"):
        parse_cli_args(["convert", "a.nsbmd", "-o", out, "--format=obj"])


def test_view_needs_input():
    with pytest.raises(UsageError, match="give me some input files"):
        parse_cli_args(["view"])


def test_view_all_animations():
    args = parse_cli_args(["view", "dir", "--all-animations"])
    assert args.flags == ["all-animations"]


def test_view_rejects_convert_options():
    with pytest.raises(UsageError, match="don't understand option"):
        parse_cli_args(["view", "dir", "--overwrite"])


def test_unknown_command():
    with pytest.raises(UsageError, match="don't understand frobnicate") as info:
        parse_cli_args(["frobnicate"])
    assert "apicula help" in info.value.hint


def test_no_arguments_prints_usage(capsys):
    with pytest.raises(SystemExit) as info:
        parse_cli_args([])
    assert info.value.code == 0
    assert capsys.readouterr().out == usage_text()


def test_version(capsys):
    with pytest.raises(SystemExit) as info:
        parse_cli_args(["--version"])
    assert info.value.code == 0
    assert capsys.readouterr().out.startswith("apicula ")


def test_help_subcommand(capsys):
    with pytest.raises(SystemExit):
        parse_cli_args(["help", "convert"])
    assert capsys.readouterr().out == subcommand_help_text("convert")


def test_help_flag(capsys):
    with pytest.raises(SystemExit) as info:
        parse_cli_args(["extract", "--help"])
    assert info.value.code == 0
    assert capsys.readouterr().out == subcommand_help_text("extract")


def test_subcommand_help_lists_options():
    text = subcommand_help_text("view")
    assert "Usage: apicula view <input...>" in text
    assert "--all-animations" in text
    assert "--output" not in text
    assert text.endswith("\n\n")


def test_info_help_has_no_trailing_blank_line():
    text = subcommand_help_text("info")
    assert "  Options:\n" in text
    assert not text.endswith("\n\n")


def test_unknown_help_topic_is_usage():
    assert subcommand_help_text("bogus") == usage_text()
    assert "Usage: apicula <command>" in usage_text()