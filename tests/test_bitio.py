import io

import pytest

from bitio import CompressorBitio


def test_output_bits_packs_msb_first():
    out = CompressorBitio.BitFile.to_buffer()
    out.output_bits(0b101, 3)
    out.output_bits(0b11111, 5)
    out.output_bits(0xABC, 12)
    assert out.getvalue() == bytes([0b10111111, 0xAB, 0xC0])
    assert out.bits_written == 20


def test_output_zero_bits_writes_nothing():
    out = CompressorBitio.BitFile.to_buffer()
    out.output_bits(0, 0)
    assert out.getvalue() == b""


def test_input_bits_unaligned_reads():
    bits = CompressorBitio.BitFile.from_bytes(bytes([0b10111111, 0xAB, 0xC0]))
    assert bits.input_bits(3) == 0b101
    assert bits.input_bit() == 1
    assert bits.input_bits(4) == 0b1111
    assert bits.input_bits(9) == 0b101010111
    assert bits.bits_read == 17


def test_input_raises_eof_at_end():
    bits = CompressorBitio.BitFile.from_bytes(b"\x01")
    assert bits.input_bits(8) == 1
    with pytest.raises(EOFError):
        bits.input_bit()


def test_reset_rewinds_input():
    bits = CompressorBitio.BitFile.from_bytes(b"\xf0\x0f")
    assert bits.input_bits(4) == 0xF
    bits.reset()
    assert bits.input_bits(16) == 0xF00F


def test_reset_rejected_on_output():
    out = CompressorBitio.BitFile.to_buffer()
    with pytest.raises(ValueError):
        out.reset()


def test_direction_is_enforced():
    out = CompressorBitio.BitFile.to_buffer()
    with pytest.raises(ValueError):
        out.input_bit()
    bits = CompressorBitio.BitFile.from_bytes(b"")
    with pytest.raises(ValueError):
        bits.output_bit(1)


def test_named_files_round_trip(tmp_path):
    name = str(tmp_path / "bits.bin")
    out = CompressorBitio.BitFile.open_output_bit_file(name)
    out.output_bits(0x1FF, 9)
    out.close_bit_file()
    assert (tmp_path / "bits.bin").read_bytes() == b"\xff\x80"

    bits = CompressorBitio.BitFile.open_input_bit_file(name)
    assert bits.input_bits(9) == 0x1FF
    assert bits.input_bits(7) == 0
    bits.close_bit_file()


def test_pacifier_prints_dots(capsys):
    out = CompressorBitio.BitFile(io.BytesIO(), False, pacifier=True)
    out.output_bits(0, 8 * 2048)
    assert capsys.readouterr().out == "."
