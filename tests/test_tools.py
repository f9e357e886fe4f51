"""Tests for the b64 and encode command-line tools."""

import base64
import io
import os
import sys

import pytest

import b64
import encode


def run(main, monkeypatch, argv, stdin=b""):
    monkeypatch.setattr(sys, 'argv', argv)
    monkeypatch.setattr(sys, 'stdin', io.TextIOWrapper(io.BytesIO(stdin)))
    with pytest.raises(SystemExit) as excinfo:
        main()
    return excinfo.value.code


def test_b64_reads_stdin(monkeypatch, capsys):
    assert run(b64.main, monkeypatch, ['b64'], b"foo") == 0
    assert capsys.readouterr().out == "Zm9v\n"


def test_b64_dash_means_stdin(monkeypatch, capsys):
    assert run(b64.main, monkeypatch, ['b64', '-'], b"fo") == 0
    assert capsys.readouterr().out == "Zm8=\n"


def test_b64_empty_input_prints_nothing(monkeypatch, capsys):
    assert run(b64.main, monkeypatch, ['b64']) == 0
    assert capsys.readouterr().out == ""


def test_b64_reads_file(monkeypatch, capsys, tmp_path):
    data = bytes(range(256)) * 3
    path = tmp_path / "blob.bin"
    path.write_bytes(data)
    assert run(b64.main, monkeypatch, ['b64', str(path)]) == 0
    out = capsys.readouterr().out
    assert out == base64.encodebytes(data).decode('ascii')
    assert max(len(line) for line in out.splitlines()) == 76


def test_b64_missing_file(monkeypatch, capsys, tmp_path):
    missing = str(tmp_path / "nope")
    assert run(b64.main, monkeypatch, ['b64', missing]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("b64: ")
    assert missing in captured.err


def test_b64_directory(monkeypatch, capsys, tmp_path):
    assert run(b64.main, monkeypatch, ['b64', str(tmp_path)]) == 1
    assert "is a directory" in capsys.readouterr().err


def test_b64_too_many_operands(monkeypatch, capsys):
    assert run(b64.main, monkeypatch, ['b64', 'a', 'b']) != 0


def test_b64_write_error_names_stdout(monkeypatch, capsys):
    class BrokenStdout:
        def write(self, text):
            raise BrokenPipeError(32, "Broken pipe")

        def flush(self):
            pass

    monkeypatch.setattr(sys, 'stdout', BrokenStdout())
    assert run(b64.main, monkeypatch, ['b64'], b"foo") == 1
    assert capsys.readouterr().err == "b64: stdout: Broken pipe\n"


def test_encode_stream_names_failing_input():
    class BadDisk:
        def read(self, n):
            raise OSError(5, "Input/output error")

    with pytest.raises(OSError) as excinfo:
        b64.encode_stream(b64.get_encoder('base64'), BadDisk(), io.StringIO(), input_name='disk.img')
    assert excinfo.value.filename == 'disk.img'


def test_encode_default_message(monkeypatch, capsys):
    assert run(encode.main, monkeypatch, ['encode']) == 0
    assert capsys.readouterr().out == (
        "Base2 encoding:\n"
        "011001100110111101101111\n"
        "Base8 encoding:\n"
        "31467557\n"
        "Base16 encoding:\n"
        "666f6f\n"
    )


def test_encode_joins_operands(monkeypatch, capsys):
    assert run(encode.main, monkeypatch, ['encode', 'f', 'o']) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[1] == "011001100010000001101111"
    assert lines[3] == "31420157"
    assert lines[5] == "66206f"


def test_encode_undecodable_argument_uses_raw_bytes(monkeypatch, capsys):
    assert run(encode.main, monkeypatch, ['encode', os.fsdecode(b"\xff")]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[1] == "11111111"
    assert lines[3] == "776====="
    assert lines[5] == "ff"


def test_b64_counts_symbols_through_encoder():
    sink = io.StringIO()
    written = b64.encode_stream(b64.get_encoder('base64'), io.BytesIO(b"foobar"), sink)
    assert written == 8
    assert sink.getvalue() == "Zm9vYmFy\n"
