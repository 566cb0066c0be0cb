from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import TYPE_CHECKING

import pyperclip
import pytest

from prompt_generator import __version__, cli

if TYPE_CHECKING:
    from pytest_mock import MockerFixture


@pytest.fixture(autouse=True)
def no_env_defaults(mocker: MockerFixture) -> None:
    mocker.patch.object(cli, "env_defaults", return_value={})


@pytest.mark.unit
def test_parse_args_defaults() -> None:
    settings = cli.parse_args([])

    assert settings.path == Path("./")
    assert settings.extensions == frozenset({".py"})
    assert settings.encoding is None
    assert settings.copy_to_clipboard is False


@pytest.mark.unit
def test_parse_args_repeated_and_comma_separated_extensions() -> None:
    settings = cli.parse_args(["-e", ".py", "-e", "go, ts", "-p", "/tmp/project", "-encoding", "sjis"])

    assert settings.extensions == frozenset({".py", ".go", ".ts"})
    assert settings.path == Path("/tmp/project")
    assert settings.encoding == "sjis"


@pytest.mark.unit
def test_parse_args_all_files_sentinel() -> None:
    settings = cli.parse_args(["-e", "."])

    assert settings.all_files is True


@pytest.mark.unit
def test_parse_args_uses_environment_defaults(mocker: MockerFixture) -> None:
    mocker.patch.object(cli, "env_defaults", return_value={"extensions": "go", "encoding": "euc-jp"})

    from_env = cli.parse_args([])
    overridden = cli.parse_args(["-e", ".rs", "-encoding", "utf-8"])

    assert from_env.extensions == frozenset({".go"})
    assert from_env.encoding == "euc-jp"
    assert overridden.extensions == frozenset({".rs"})
    assert overridden.encoding == "utf-8"


@pytest.mark.unit
def test_parse_args_help_flag(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.parse_args(["-h"])

    assert exc_info.value.code == 0
    out = capsys.readouterr().out
    assert "usage:" in out
    assert "-encoding" in out


@pytest.mark.unit
def test_parse_args_version_flag(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.parse_args(["--version"])

    assert exc_info.value.code == 0
    assert __version__ in capsys.readouterr().out


@pytest.mark.unit
def test_read_instructions_keeps_one_newline_per_line() -> None:
    assert cli.read_instructions(io.StringIO("first\r\nsecond\n\nlast")) == "first\nsecond\n\nlast\n"


@pytest.mark.unit
def test_read_instructions_empty_input() -> None:
    assert cli.read_instructions(io.StringIO("")) == ""


@pytest.mark.unit
def test_copy_to_clipboard_failure_is_not_fatal(mocker: MockerFixture, caplog: pytest.LogCaptureFixture) -> None:
    mocker.patch.object(cli.pyperclip, "copy", side_effect=pyperclip.PyperclipException("no clipboard"))

    assert cli.copy_to_clipboard("prompt") is False
    assert "no clipboard" in caplog.text


@pytest.mark.unit
def test_main_rejects_unknown_encoding_before_walking(
    tmp_path: Path,
    mocker: MockerFixture,
    capsys: pytest.CaptureFixture[str],
) -> None:
    collect = mocker.patch.object(cli, "collect_files_content")

    exit_code = cli.main(["-p", str(tmp_path), "-encoding", "klingon"], stdin=io.StringIO(""))

    assert exit_code == 1
    collect.assert_not_called()
    captured = capsys.readouterr()
    assert "error: unsupported encoding: klingon" in captured.err
    assert not captured.out


@pytest.mark.unit
def test_main_missing_root_fails(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = cli.main(["-p", str(tmp_path / "missing")], stdin=io.StringIO(""))

    assert exit_code == 1
    assert "error: cannot scan" in capsys.readouterr().err


@pytest.mark.unit
def test_main_file_as_root_reports_the_root(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    target = tmp_path / "a.py"
    target.write_text("x", encoding="utf-8")

    exit_code = cli.main(["-p", str(target)], stdin=io.StringIO(""))

    assert exit_code == 1
    err = capsys.readouterr().err
    assert "error: cannot scan" in err
    assert "not a directory" in err
    assert "failed to read" not in err


@pytest.mark.unit
def test_main_logs_all_files_when_dot_extension_given(
    tmp_path: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.INFO)
    (tmp_path / "notes.txt").write_text("x", encoding="utf-8")

    exit_code = cli.main(["-p", str(tmp_path), "-e", "."], stdin=io.StringIO(""))

    assert exit_code == 0
    assert "extensions=all" in caplog.text


@pytest.mark.unit
def test_main_unreadable_gitignore_fails(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / ".gitignore").mkdir()
    (tmp_path / "a.py").write_text("x", encoding="utf-8")

    exit_code = cli.main(["-p", str(tmp_path)], stdin=io.StringIO(""))

    assert exit_code == 1
    assert ".gitignore" in capsys.readouterr().err


@pytest.mark.unit
def test_main_no_matching_files_prints_no_prompt(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "notes.txt").write_text("hello", encoding="utf-8")

    exit_code = cli.main(["-p", str(tmp_path), "-e", ".py"], stdin=io.StringIO("do something\n"))

    assert exit_code == 1
    captured = capsys.readouterr()
    assert "error: no valid files found" in captured.err
    assert not captured.out


@pytest.mark.unit
def test_main_does_not_copy_unless_asked(tmp_path: Path, mocker: MockerFixture) -> None:
    (tmp_path / "a.py").write_text("x", encoding="utf-8")
    copy = mocker.patch.object(cli.pyperclip, "copy")

    exit_code = cli.main(["-p", str(tmp_path)], stdin=io.StringIO("go\n"))

    assert exit_code == 0
    copy.assert_not_called()
