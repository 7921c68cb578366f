# filename: huffman_bits.py

from typing import Mapping, Tuple

from bitarray import bitarray

from huffman_errors import InvalidPadding


def encode_symbols(data: bytes, codes: Mapping[int, bitarray]) -> bitarray:
    """Concatenate the code of every byte of ``data`` in input order."""
    bits = bitarray(endian="big")
    bits.encode(codes, data)
    return bits


def pack_bits(bits: bitarray) -> Tuple[bytes, int]:
    # tobytes() fills the last byte with zero bits
    padding = (8 - len(bits) % 8) % 8
    return bits.tobytes(), padding


def unpack_bits(buffer: bytes, padding: int) -> bitarray:
    if not 0 <= padding <= 7:
        raise InvalidPadding(f"padding must be in [0, 7], got {padding}")
    if padding and not buffer:
        raise InvalidPadding(f"padding of {padding} bits with no payload bytes")

    bits = bitarray(endian="big")
    bits.frombytes(bytes(buffer))
    if padding:
        del bits[-padding:]
    return bits
