# Bradford Arrington 2025
import sys

from bitio import CompressorBitio
from huff import COMPRESSION_NAME, USAGE, HuffException, compress_file
from perf import debug_level, print_ratios, short_name, track_performance


def main(arguments: list) -> int:
    if len(arguments) < 3:
        print(f"\nUsage:  {short_name(arguments[0])} {USAGE}")
        return 0

    debug = debug_level(arguments[3:])
    input_bit_file = None
    output_bit_file = None
    try:
        input_bit_file = CompressorBitio.BitFile.open_input_bit_file(arguments[1])
        output_bit_file = track_performance("OpenBitFile", CompressorBitio.BitFile.open_output_bit_file, arguments[2])
        track_performance("CompressFile", compress_file, input_bit_file, output_bit_file, debug)
        track_performance("CloseBitFile", output_bit_file.close_bit_file)
        print(f"\nCompressing {arguments[1]} to {arguments[2]}")
        print(f"Using {COMPRESSION_NAME}\n")
        print_ratios(arguments[1], arguments[2])
    except FileNotFoundError:
        print(f"Error: Input file '{arguments[1]}' not found.")
        return 1
    except HuffException as e:
        print(f"Compression failed: {e}")
        return 1
    except Exception as e:
        print(f"An error occurred: {e}")
        return 1
    finally:
        if input_bit_file is not None:
            input_bit_file.close_bit_file()
        if output_bit_file is not None and not output_bit_file.file_stream.closed:
            output_bit_file.close_bit_file()
    return 0


if __name__ == '__main__':
    sys.exit(main(sys.argv))
