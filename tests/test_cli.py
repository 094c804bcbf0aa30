import os
import runpy

import pytest

SCRIPTS = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'Python'))


def _main(script):
    return runpy.run_path(os.path.join(SCRIPTS, script))["main"]


@pytest.fixture
def compress_main():
    return _main("main-c.py")


@pytest.fixture
def expand_main():
    return _main("main-e.py")


def test_compress_then_expand(tmp_path, compress_main, expand_main, capsys):
    original = tmp_path / "in.txt"
    packed = tmp_path / "in.huf"
    unpacked = tmp_path / "out.txt"
    original.write_bytes(b"the quick brown fox jumps over the lazy dog\n" * 40)

    assert compress_main(["main-c.py", str(original), str(packed)]) == 0
    report = capsys.readouterr().out
    assert "CompressFile" in report
    assert "Compression ratio:" in report

    assert expand_main(["main-e.py", str(packed), str(unpacked)]) == 0
    assert unpacked.read_bytes() == original.read_bytes()


def test_compress_empty_file(tmp_path, compress_main, expand_main):
    original = tmp_path / "empty"
    packed = tmp_path / "empty.huf"
    unpacked = tmp_path / "empty.out"
    original.write_bytes(b"")

    assert compress_main(["main-c.py", str(original), str(packed)]) == 0
    assert expand_main(["main-e.py", str(packed), str(unpacked)]) == 0
    assert unpacked.read_bytes() == b""


def test_usage_without_arguments(compress_main, capsys):
    assert compress_main(["/usr/bin/main-c.py"]) == 0
    assert "Usage:  main-c infile outfile" in capsys.readouterr().out


def test_missing_input_file(tmp_path, compress_main, capsys):
    assert compress_main(["main-c.py", str(tmp_path / "nope"), str(tmp_path / "x")]) == 1
    assert "not found" in capsys.readouterr().out


def test_expand_rejects_foreign_file(tmp_path, expand_main, capsys):
    foreign = tmp_path / "foreign.bin"
    unpacked = tmp_path / "out"
    foreign.write_bytes(b"PK\x03\x04 not a huffman file")

    assert expand_main(["main-e.py", str(foreign), str(unpacked)]) == 1
    assert "illegal header" in capsys.readouterr().out
    assert not unpacked.exists()


def test_expand_truncated_file_writes_nothing(tmp_path, compress_main, expand_main, capsys):
    original = tmp_path / "in.txt"
    packed = tmp_path / "in.huf"
    unpacked = tmp_path / "out.txt"
    original.write_bytes(b"abcabcabd" * 30)
    assert compress_main(["main-c.py", str(original), str(packed)]) == 0
    packed.write_bytes(packed.read_bytes()[:-1])

    assert expand_main(["main-e.py", str(packed), str(unpacked)]) == 1
    assert "no PSEUDO_EOF" in capsys.readouterr().out
    assert not unpacked.exists()


def test_debug_flag_dumps_model(tmp_path, compress_main, capsys):
    original = tmp_path / "in.txt"
    original.write_bytes(b"aab")
    assert compress_main(["main-c.py", str(original), str(tmp_path / "in.huf"), "-d"]) == 0
    assert "Huffman code=" in capsys.readouterr().out
