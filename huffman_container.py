# filename: huffman_container.py

"""
On-disk layout of a compressed image (all integers little-endian):

    symbol_count : uint32
    symbol_count x (symbol : uint8, frequency : int32)
    padding      : uint8, in [0, 7]
    payload      : packed bitstream, most-significant bit first

The frequency entries are kept in the order they were written. Decoding
rebuilds the tree from them, so that order is part of the format.
"""

import struct
from typing import Dict, Mapping, NamedTuple

from huffman_errors import InvalidPadding, MalformedHeader

COUNT = struct.Struct("<I")
ENTRY = struct.Struct("<Bi")
PADDING = struct.Struct("<B")


class Container(NamedTuple):
    frequencies: Dict[int, int]
    padding: int
    payload: bytes


def write_container(freqs: Mapping[int, int], padding: int, payload: bytes) -> bytes:
    out = bytearray(COUNT.pack(len(freqs)))
    for symbol, freq in freqs.items():
        out += ENTRY.pack(symbol, freq)
    out += PADDING.pack(padding)
    out += payload
    return bytes(out)


def read_container(blob: bytes) -> Container:
    view = memoryview(blob)
    if len(view) < COUNT.size:
        raise MalformedHeader(f"container is {len(view)} bytes, too short for a symbol count")

    (symbol_count,) = COUNT.unpack_from(view, 0)
    if symbol_count > 256:
        raise MalformedHeader(f"symbol count {symbol_count} exceeds the byte alphabet")

    header_size = COUNT.size + symbol_count * ENTRY.size + PADDING.size
    if len(view) < header_size:
        raise MalformedHeader(
            f"header declares {symbol_count} symbols but only {len(view)} bytes are available"
        )

    freqs = {}
    offset = COUNT.size
    for _ in range(symbol_count):
        symbol, freq = ENTRY.unpack_from(view, offset)
        offset += ENTRY.size
        if symbol in freqs:
            raise MalformedHeader(f"symbol {symbol} listed twice")
        if freq < 0:
            raise MalformedHeader(f"symbol {symbol} has negative frequency {freq}")
        freqs[symbol] = freq

    (padding,) = PADDING.unpack_from(view, offset)
    offset += PADDING.size
    if padding > 7:
        raise InvalidPadding(f"padding must be in [0, 7], got {padding}")

    return Container(freqs, padding, view[offset:].tobytes())
