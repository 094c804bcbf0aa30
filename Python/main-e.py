# Bradford Arrington 2025
import io
import sys

from bitio import CompressorBitio
from huff import COMPRESSION_NAME, USAGE, HuffException, expand_file
from perf import debug_level, short_name, track_performance


def main(arguments: list) -> int:
    if len(arguments) < 3:
        print(f"\nUsage:  {short_name(arguments[0])} {USAGE}")
        return 0

    debug = debug_level(arguments[3:])
    input_bit_file = None
    try:
        input_bit_file = CompressorBitio.BitFile.open_input_bit_file(arguments[1])

        print(f"\nDecompressing {arguments[1]} to {arguments[2]}")
        print(f"Using {COMPRESSION_NAME}\n")

        # The output file is only created once the whole body has decoded
        expanded = io.BytesIO()
        track_performance("ExpandFile", expand_file, input_bit_file, expanded, debug)
        with open(arguments[2], 'wb') as output_file:
            output_file.write(expanded.getvalue())
    except FileNotFoundError:
        print(f"Error: Input file '{arguments[1]}' not found.")
        return 1
    except HuffException as e:
        print(f"Decompression failed: {e}")
        return 1
    except Exception as e:
        print(f"An error occurred: {e}")
        return 1
    finally:
        if input_bit_file is not None:
            input_bit_file.close_bit_file()
    return 0


if __name__ == '__main__':
    sys.exit(main(sys.argv))
