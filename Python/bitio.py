#Bradford Arrington 2025
import io
import sys
from typing import BinaryIO


class CompressorBitio:
    PACIFIER_COUNT = 2047

    class BitFile:
        """Bit-addressable wrapper around a binary stream.

        Bits are packed most significant bit first. An input BitFile raises
        EOFError once the underlying stream is exhausted.
        """

        def __init__(self, stream: BinaryIO, input_mode: bool, pacifier: bool = False):
            self.is_input = input_mode
            self.file_stream: BinaryIO = stream
            self.rack: int = 0
            self.mask: int = 0x80
            self.pacifier = pacifier
            self.pacifier_counter: int = 0
            self.bits_read: int = 0
            self.bits_written: int = 0

        @staticmethod
        def open_output_bit_file(name: str) -> 'CompressorBitio.BitFile':
            return CompressorBitio.BitFile(open(name, "wb"), False, pacifier=True)

        @staticmethod
        def open_input_bit_file(name: str) -> 'CompressorBitio.BitFile':
            return CompressorBitio.BitFile(open(name, "rb"), True, pacifier=True)

        @staticmethod
        def from_bytes(data: bytes) -> 'CompressorBitio.BitFile':
            return CompressorBitio.BitFile(io.BytesIO(data), True)

        @staticmethod
        def to_buffer() -> 'CompressorBitio.BitFile':
            return CompressorBitio.BitFile(io.BytesIO(), False)

        def getvalue(self) -> bytes:
            # Only meaningful for in-memory streams; includes the partial byte.
            self.flush_bit_file()
            return self.file_stream.getvalue()

        def flush_bit_file(self):
            if not self.is_input and self.mask != 0x80:
                self._put_byte(self.rack)
                self.rack = 0
                self.mask = 0x80

        def close_bit_file(self):
            self.flush_bit_file()
            self.file_stream.close()

        def reset(self):
            if not self.is_input:
                raise ValueError("reset() is only supported on input bit files")
            self.file_stream.seek(0)
            self.rack = 0
            self.mask = 0x80

        def _pacify(self):
            self.pacifier_counter += 1
            if self.pacifier and (self.pacifier_counter & CompressorBitio.PACIFIER_COUNT) == 0:
                sys.stdout.write(".")
                sys.stdout.flush()

        def _put_byte(self, value: int):
            self.file_stream.write(bytes([value]))
            self._pacify()

        def _next_byte(self) -> int:
            read = self.file_stream.read(1)
            if not read:
                raise EOFError("End of file reached.")
            self._pacify()
            return read[0]

        def output_bit(self, bit: int):
            self.output_bits(1 if bit else 0, 1)

        def output_bits(self, code: int, count: int):
            if self.is_input:
                raise ValueError("cannot write to an input bit file")
            self.bits_written += count
            while count > 0:
                # Byte aligned: skip the per-bit loop
                if self.mask == 0x80 and count >= 8:
                    count -= 8
                    self._put_byte((code >> count) & 0xFF)
                    continue
                count -= 1
                if (code >> count) & 1:
                    self.rack |= self.mask
                self.mask >>= 1
                if self.mask == 0:
                    self._put_byte(self.rack)
                    self.rack = 0
                    self.mask = 0x80

        def input_bit(self) -> int:
            return self.input_bits(1)

        def input_bits(self, bit_count: int) -> int:
            if not self.is_input:
                raise ValueError("cannot read from an output bit file")
            return_value: int = 0
            while bit_count > 0:
                if self.mask == 0x80 and bit_count >= 8:
                    return_value = (return_value << 8) | self._next_byte()
                    bit_count -= 8
                    self.bits_read += 8
                    continue
                if self.mask == 0x80:
                    self.rack = self._next_byte()
                return_value = (return_value << 1) | (1 if self.rack & self.mask else 0)
                self.mask >>= 1
                if self.mask == 0:
                    self.mask = 0x80
                bit_count -= 1
                self.bits_read += 1
            return return_value
