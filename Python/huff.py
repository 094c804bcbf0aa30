#Brad Arrington
import heapq
import io
from typing import BinaryIO, List, Optional, Tuple

from bitio import CompressorBitio

BITS_PER_WORD = 8
BITS_PER_INT = 32
ALPH_SIZE = 1 << BITS_PER_WORD
END_OF_STREAM = ALPH_SIZE
SYMBOL_COUNT = END_OF_STREAM + 1
LEAF_BITS = BITS_PER_WORD + 1
HUFF_NUMBER = 0xface8200
HUFF_TREE = HUFF_NUMBER | 1

DEBUG_LOW = 1
DEBUG_HIGH = 4

COMPRESSION_NAME = "static order 0 model with Huffman coding, tree header"
USAGE = "infile outfile [-d|-dd]\n\nSpecifying -d will dump the modeling data, -dd adds bit counts\n"


class HuffException(Exception):
    pass


class InvalidFormat(HuffException):
    pass


class MalformedHeader(HuffException):
    pass


class MalformedBody(HuffException):
    pass


class Node:
    __slots__ = ['count', 'child_0', 'child_1']

    def __init__(self, count=0, child_0=-1, child_1=-1):
        self.count = count
        self.child_0 = child_0
        self.child_1 = child_1


class Code:
    __slots__ = ['code', 'code_bits']

    def __init__(self, code=0, code_bits=0):
        self.code = code
        self.code_bits = code_bits

    def __repr__(self):
        return f"Code({self.code:0{self.code_bits}b})" if self.code_bits else "Code()"


def is_leaf(node: int) -> bool:
    return node <= END_OF_STREAM


def compress_file(input_bit_file: 'CompressorBitio.BitFile', output_bit_file: 'CompressorBitio.BitFile', debug: int = 0):
    """Two passes over input_bit_file: count, then encode after a reset.

    The caller owns both bit files and is responsible for closing the output.
    """
    counts = count_bytes(input_bit_file)
    nodes, root_node = build_tree(counts)
    codes = convert_tree_to_code(nodes, root_node)

    if debug >= DEBUG_LOW:
        print_model(nodes, codes, root_node)

    output_bit_file.output_bits(HUFF_TREE, BITS_PER_INT)
    write_header(output_bit_file, nodes, root_node)
    compress_data(input_bit_file, output_bit_file, codes)

    if debug >= DEBUG_HIGH:
        print(f"bits read {input_bit_file.bits_read}  bits written {output_bit_file.bits_written}")


def expand_file(input_bit_file: 'CompressorBitio.BitFile', output_file: BinaryIO, debug: int = 0) -> int:
    try:
        magic = input_bit_file.input_bits(BITS_PER_INT)
    except EOFError as e:
        raise InvalidFormat("input too short to hold a header") from e
    if magic != HUFF_TREE:
        raise InvalidFormat(f"illegal header starts with {magic:#010x}")

    nodes, root_node = read_header(input_bit_file)

    if debug >= DEBUG_LOW:
        print_model(nodes, None, root_node)

    written = expand_data(input_bit_file, output_file, nodes, root_node)

    if debug >= DEBUG_HIGH:
        print(f"bits read {input_bit_file.bits_read}  bytes written {written}")
    return written


def compress(data: bytes, debug: int = 0) -> bytes:
    input_bit_file = CompressorBitio.BitFile.from_bytes(data)
    output_bit_file = CompressorBitio.BitFile.to_buffer()
    compress_file(input_bit_file, output_bit_file, debug)
    return output_bit_file.getvalue()


def decompress(data: bytes, debug: int = 0) -> bytes:
    input_bit_file = CompressorBitio.BitFile.from_bytes(data)
    output = io.BytesIO()
    expand_file(input_bit_file, output, debug)
    return output.getvalue()


def count_bytes(input_bit_file: 'CompressorBitio.BitFile') -> List[int]:
    counts = [0] * SYMBOL_COUNT
    while True:
        try:
            c = input_bit_file.input_bits(BITS_PER_WORD)
        except EOFError:
            break
        counts[c] += 1

    # Set EOF count
    counts[END_OF_STREAM] = 1
    return counts


def build_tree(counts: List[int]) -> Tuple[List[Node], int]:
    """Greedy Huffman merge over an arena of nodes.

    Indices 0..END_OF_STREAM are the leaves, internal nodes are appended
    after them. Equal weights are broken by the lower index, so the tree
    for a given table is always the same.
    """
    nodes = [Node(count) for count in counts]
    heap = [(count, i) for i, count in enumerate(counts) if count != 0]
    if not heap:
        raise ValueError("cannot build a tree from an empty frequency table")
    heapq.heapify(heap)

    while len(heap) > 1:
        count_1, min_1 = heapq.heappop(heap)
        count_2, min_2 = heapq.heappop(heap)
        next_free = len(nodes)
        nodes.append(Node(count_1 + count_2, min_1, min_2))
        heapq.heappush(heap, (count_1 + count_2, next_free))

    return nodes, heap[0][1]


def convert_tree_to_code(nodes: List[Node], root_node: int) -> List[Optional[Code]]:
    codes: List[Optional[Code]] = [None] * SYMBOL_COUNT
    stack = [(root_node, 0, 0)]
    while stack:
        node, code_so_far, bits = stack.pop()
        if is_leaf(node):
            codes[node] = Code(code_so_far, bits)
            continue
        code_so_far <<= 1
        bits += 1
        stack.append((nodes[node].child_1, code_so_far | 1, bits))
        stack.append((nodes[node].child_0, code_so_far, bits))
    return codes


def write_header(output_bit_file: 'CompressorBitio.BitFile', nodes: List[Node], root_node: int):
    stack = [root_node]
    while stack:
        node = stack.pop()
        if is_leaf(node):
            output_bit_file.output_bit(1)
            output_bit_file.output_bits(node, LEAF_BITS)
        else:
            output_bit_file.output_bit(0)
            # child_0 must come out first
            stack.append(nodes[node].child_1)
            stack.append(nodes[node].child_0)


def read_header(input_bit_file: 'CompressorBitio.BitFile') -> Tuple[List[Node], int]:
    """Rebuild the arena from a preorder header.

    `pending` holds the internal nodes still waiting for their child_1; the
    next node read always belongs to the deepest one.
    """
    nodes = [Node() for _ in range(SYMBOL_COUNT)]
    pending: List[int] = []
    root_node = -1
    saw_eof = False

    while True:
        try:
            if input_bit_file.input_bit():
                node = input_bit_file.input_bits(LEAF_BITS)
                if node > END_OF_STREAM:
                    raise MalformedHeader(f"leaf value {node} out of range")
                saw_eof = saw_eof or node == END_OF_STREAM
            else:
                node = len(nodes)
                nodes.append(Node())
        except EOFError as e:
            raise MalformedHeader("bad input, tree header is incomplete") from e

        if pending:
            parent = nodes[pending[-1]]
            if parent.child_0 == -1:
                parent.child_0 = node
            else:
                parent.child_1 = node
                pending.pop()
        else:
            root_node = node

        if not is_leaf(node):
            pending.append(node)
        if not pending:
            break

    if not saw_eof:
        raise MalformedHeader("bad input, no PSEUDO_EOF in tree header")
    return nodes, root_node


def compress_data(input_bit_file: 'CompressorBitio.BitFile', output_bit_file: 'CompressorBitio.BitFile', codes: List[Optional[Code]]):
    input_bit_file.reset()

    while True:
        try:
            c = input_bit_file.input_bits(BITS_PER_WORD)
        except EOFError:
            break
        code = codes[c]
        if code is None:
            raise HuffException(f"byte {c} was not seen while counting; input changed between passes")
        output_bit_file.output_bits(code.code, code.code_bits)

    code = codes[END_OF_STREAM]
    output_bit_file.output_bits(code.code, code.code_bits)


def expand_data(input_bit_file: 'CompressorBitio.BitFile', output_file: BinaryIO, nodes: List[Node], root_node: int) -> int:
    expanded = bytearray()
    while True:
        node = root_node

        # Traverse the tree bit by bit
        while not is_leaf(node):
            try:
                bit = input_bit_file.input_bit()
            except EOFError as e:
                raise MalformedBody("bad input, no PSEUDO_EOF") from e
            node = nodes[node].child_1 if bit else nodes[node].child_0

        if node == END_OF_STREAM:
            break
        expanded.append(node)

    output_file.write(expanded)
    return len(expanded)


def print_char(c):
    if 0x20 <= c < 127:
        print(f"'{chr(c)}'", end="")
    elif c == END_OF_STREAM:
        print("EOF", end="")
    else:
        print(f"{c:3d}", end="")


def print_model(nodes: List[Node], codes: Optional[List[Optional[Code]]], root_node: int):
    stack = [root_node]
    while stack:
        i = stack.pop()
        node = nodes[i]
        print("node=", end="")
        if is_leaf(i):
            print_char(i)
        else:
            print(f"{i:3d}", end="")
        print(f"  count={node.count:3d}", end="")

        if is_leaf(i):
            if codes is not None and codes[i] is not None:
                print("  Huffman code=", end="")
                print(f"<{codes[i].code:0{codes[i].code_bits}b}>" if codes[i].code_bits else "<>", end="")
        else:
            print(f"  child_0={node.child_0:3d}  child_1={node.child_1:3d}", end="")
            stack.append(node.child_1)
            stack.append(node.child_0)
        print()
