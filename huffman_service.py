# filename: huffman_service.py

import contextlib
import logging
import os
import stat
import tempfile

from bitarray import bitarray

from huffman_bits import encode_symbols, pack_bits, unpack_bits
from huffman_container import read_container, write_container
from huffman_core import FREQ_LIMIT, HuffmanLogic, HuffmanNode, count_frequencies, with_filler
from huffman_errors import (
    EmptyInput,
    FrequencyOverflow,
    IoUnavailable,
    MalformedHeader,
    TruncatedBitstream,
)

logger = logging.getLogger(__name__)


class HuffmanService:
    """Compress and decompress whole in-memory buffers.

    Each call builds its own frequency table and tree; nothing is shared
    between calls. Empty input compresses to a header announcing zero
    symbols unless the service was created with ``allow_empty=False``.
    """

    def __init__(self, allow_empty=True):
        self.logic = HuffmanLogic()
        self.allow_empty = allow_empty

    def compress(self, data):
        # memoryview refuses ints, which bytes() would treat as a length
        data = memoryview(data).tobytes()
        if not data:
            if not self.allow_empty:
                raise EmptyInput("refusing to compress empty input")
            logger.warning("compressing empty input; writing a zero-symbol container")
            return write_container({}, 0, b"")

        freqs = with_filler(count_frequencies(data))
        heaviest = max(freqs.values())
        if heaviest > FREQ_LIMIT:
            raise FrequencyOverflow(f"symbol frequency {heaviest} does not fit in int32")

        tree = self.logic.build_tree(freqs)
        codes = self.logic.generate_codes(tree)
        payload, padding = pack_bits(encode_symbols(data, codes))

        logger.debug("%d symbols, %d payload bytes, %d padding bits", len(freqs), len(payload), padding)
        return write_container(freqs, padding, payload)

    def decompress(self, blob):
        container = read_container(memoryview(blob).tobytes())
        freqs = container.frequencies

        if not freqs:
            if container.padding or container.payload:
                raise MalformedHeader("zero-symbol container carries payload data")
            return b""
        if not container.payload:
            raise TruncatedBitstream(f"header lists {len(freqs)} symbols but the payload is empty")

        tree = self.logic.build_tree(freqs)
        bits = unpack_bits(container.payload, container.padding)
        out = self._walk(tree, bits)

        expected = sum(freqs.values())
        if len(out) < expected:
            raise TruncatedBitstream(f"decoded {len(out)} bytes, header promises {expected}")
        if len(out) > expected:
            raise MalformedHeader(f"decoded {len(out)} bytes, header promises only {expected}")
        return out

    @staticmethod
    def _walk(root: HuffmanNode, bits: bitarray) -> bytes:
        out = bytearray()
        node = root
        for bit in bits:
            node = node.right if bit else node.left
            if node.is_leaf:
                out.append(node.symbol)
                node = root
        if node is not root:
            raise TruncatedBitstream("bitstream ends in the middle of a code")
        return bytes(out)


def compress(data):
    return HuffmanService().compress(data)


def decompress(blob):
    return HuffmanService().decompress(blob)


def _read(path):
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise IoUnavailable(f"cannot read {path}: {e}") from e


def _target_mode(path):
    """Mode the published file should carry, as a plain ``open()`` would give it."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _publish(path, data):
    """Write ``data`` next to ``path`` and rename it into place."""
    directory = os.path.dirname(os.path.abspath(path))
    try:
        fd, tmp = tempfile.mkstemp(prefix=".huffzip-", dir=directory)
    except OSError as e:
        raise IoUnavailable(f"cannot write {path}: {e}") from e
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        # mkstemp creates the file 0600
        os.chmod(tmp, _target_mode(path))
        os.replace(tmp, path)
    except OSError as e:
        raise IoUnavailable(f"cannot write {path}: {e}") from e
    finally:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(tmp)


def compress_file(src, dst, service=None):
    service = service or HuffmanService()
    data = _read(src)
    blob = service.compress(data)
    _publish(dst, blob)
    logger.info("compressed %s (%d bytes) -> %s (%d bytes)", src, len(data), dst, len(blob))
    return len(data), len(blob)


def decompress_file(src, dst, service=None):
    service = service or HuffmanService()
    blob = _read(src)
    data = service.decompress(blob)
    _publish(dst, data)
    logger.info("decompressed %s (%d bytes) -> %s (%d bytes)", src, len(blob), dst, len(data))
    return len(blob), len(data)
