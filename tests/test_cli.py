# tests/test_cli.py
from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import pytest

import utf8codec
from utf8codec.cli import main


def _run(*args: str, stdin: bytes | None = None) -> subprocess.CompletedProcess[bytes]:
    return subprocess.run(
        [sys.executable, "-m", "utf8codec.cli", *args],
        input=stdin,
        capture_output=True,
    )


def test_cli_repairs_file(tmp_path: Path):
    f = tmp_path / "test.txt"
    f.write_bytes(b"caf\xc3\xa9 \xc0\x80!")
    result = _run("--strategy", "pure", str(f))
    assert result.returncode == 0
    assert result.stdout == "caf\u00e9 \ufffd!".encode()


def test_cli_stdin():
    result = _run(stdin=b"\xe2\x82\xac\xe2\x82")
    assert result.returncode == 0
    assert result.stdout == "\u20ac\ufffd".encode()


def test_cli_check(tmp_path: Path):
    good = tmp_path / "good.txt"
    good.write_bytes("日本語".encode())
    bad = tmp_path / "bad.txt"
    bad.write_bytes(b"ab\xff\xe2\x82")
    result = _run("--check", str(good), str(bad))
    assert result.returncode == 0
    lines = result.stdout.decode().splitlines()
    assert lines[0] == f"{good}: valid UTF-8"
    assert lines[1] == (
        f"{bad}: 2 ill-formed sequence(s), first at byte 2 (invalid start byte)"
    )


def test_cli_strict_failure(tmp_path: Path):
    f = tmp_path / "bad.txt"
    f.write_bytes(b"ok\xe2\x82")
    result = _run("--strict", "--strategy", "pure", str(f))
    assert result.returncode == 1
    assert b"unexpected end of data at byte 2" in result.stderr


def test_cli_version():
    result = _run("--version")
    assert result.returncode == 0
    assert utf8codec.__version__ in result.stdout.decode()


def test_cli_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    missing = tmp_path / "missing.txt"
    assert main([str(missing)]) == 1
    assert "missing.txt" in capsys.readouterr().err


def test_cli_main_check_in_process(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    f = tmp_path / "test.txt"
    f.write_bytes(b"plain ascii")
    assert main(["--check", "-s", "native", str(f)]) == 0
    assert capsys.readouterr().out.strip() == f"{f}: valid UTF-8"


def test_cli_invalid_strategy():
    with pytest.raises(SystemExit):
        main(["--strategy", "iconv"])


def test_cli_check_ignores_strategy(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    f = tmp_path / "bad.txt"
    f.write_bytes(b"\xc0\x80")
    # The native strategy would replace these two bytes separately.
    assert main(["--check", "--strategy", "native", str(f)]) == 0
    out = capsys.readouterr().out.strip()
    assert out == (
        f"{f}: 1 ill-formed sequence(s), first at byte 0 (invalid start byte)"
    )


def test_cli_help_documents_check(capsys: pytest.CaptureFixture[str]):
    with pytest.raises(SystemExit):
        main(["--help"])
    help_text = " ".join(capsys.readouterr().out.split())
    assert "always come from the pure decoder" in help_text
