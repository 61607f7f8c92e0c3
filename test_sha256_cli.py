import hashlib
import io
import sys

import pytest
import yaml

from sha256_cli import main


ABC_HEX = "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"


@pytest.fixture
def sample_files(tmp_path):
    first = tmp_path / "input-01.txt"
    first.write_bytes(b"x" * 64)
    second = tmp_path / "input-02.txt"
    second.write_bytes(b"Tests are  just\nthe right size\nfor 9 bytes\nat the end.\n" * 3)
    return first, second


def test_hashes_files_in_order(sample_files, capsys):
    first, second = sample_files

    assert main([str(first), str(second)]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        f"{hashlib.sha256(first.read_bytes()).hexdigest()} {first}",
        f"{hashlib.sha256(second.read_bytes()).hexdigest()} {second}",
    ]


@pytest.mark.parametrize("chunk_size", ["1", "7", "64", "1000"])
def test_chunk_size_does_not_change_digest(sample_files, capsys, chunk_size):
    _, second = sample_files

    assert main(["--chunk-size", chunk_size, str(second)]) == 0

    digest_hex = capsys.readouterr().out.split()[0]
    assert digest_hex == hashlib.sha256(second.read_bytes()).hexdigest()


def test_hashes_string(capsys):
    assert main(["-s", "abc"]) == 0
    assert capsys.readouterr().out == f"{ABC_HEX} 'abc'\n"


def test_missing_file_is_reported_and_skipped(sample_files, tmp_path, capsys):
    first, _ = sample_files
    missing = tmp_path / "does-not-exist.bin"

    assert main([str(missing), str(first)]) == 1

    captured = capsys.readouterr()
    assert "Error reading file" in captured.err
    assert str(missing) in captured.err
    assert captured.out == f"{hashlib.sha256(first.read_bytes()).hexdigest()} {first}\n"


def test_yaml_output(sample_files, capsys):
    first, _ = sample_files

    assert main(["--format", "yaml", "-s", "abc", str(first)]) == 0

    results = yaml.safe_load(capsys.readouterr().out)
    assert results == [
        {"source": "'abc'", "digest": ABC_HEX},
        {"source": str(first), "digest": hashlib.sha256(first.read_bytes()).hexdigest()},
    ]


def test_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(b"abc")))

    assert main(["-"]) == 0
    assert capsys.readouterr().out == f"{ABC_HEX} -\n"


def test_no_inputs_prints_usage(capsys):
    assert main([]) == 2
    assert "usage" in capsys.readouterr().err


@pytest.mark.parametrize("value", ["0", "-5", "abc"])
def test_rejects_bad_chunk_size(value, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--chunk-size", value, "-s", "abc"])
    assert excinfo.value.code == 2
