# filename: huffman_core.py

import heapq
from collections import Counter
from typing import Dict, Mapping

from bitarray import bitarray

# frequencies are stored as int32
FREQ_LIMIT = 2 ** 31 - 1


def count_frequencies(data: bytes) -> Dict[int, int]:
    """Count each distinct byte of ``data``, keyed in ascending symbol order.

    The container stores entries in this order and the tree builder seeds
    its heap in the same order, so ties resolve identically on both sides.
    """
    counts = Counter(data)
    return {symbol: counts[symbol] for symbol in sorted(counts)}


def filler_symbol(symbol: int) -> int:
    return 1 if symbol == 0 else 0


def with_filler(freqs: Mapping[int, int]) -> Dict[int, int]:
    """Return ``freqs`` with a zero-weight filler leaf when only one symbol exists.

    A lone leaf cannot be given a non-empty code, so a second symbol is
    added to force a two-leaf tree.
    """
    table = dict(freqs)
    if len(table) == 1:
        (symbol,) = table
        table[filler_symbol(symbol)] = 0
        table = {s: table[s] for s in sorted(table)}
    return table


class HuffmanNode:
    __slots__ = ("symbol", "freq", "left", "right")

    def __init__(self, symbol, freq, left=None, right=None):
        self.symbol = symbol
        self.freq = freq
        self.left = left
        self.right = right

    @property
    def is_leaf(self):
        return self.left is None and self.right is None

    def __repr__(self):
        if self.is_leaf:
            return f"HuffmanNode(symbol={self.symbol}, freq={self.freq})"
        return f"HuffmanNode(freq={self.freq})"


class HuffmanLogic:
    def build_tree(self, freqs: Mapping[int, int]) -> HuffmanNode:
        """Merge the two lightest nodes until a single root remains.

        Heap entries are ``(freq, order, node)``. Leaves take ``order`` from
        the table's iteration order and every merged node takes the next
        unused value, so equal frequencies always pop in the same sequence.
        The first node popped becomes the left (0) child.
        """
        if not freqs:
            raise ValueError("cannot build a Huffman tree from an empty frequency table")

        table = with_filler(freqs)
        priority_queue = []
        for order, (symbol, freq) in enumerate(table.items()):
            priority_queue.append((freq, order, HuffmanNode(symbol, freq)))
        heapq.heapify(priority_queue)

        order = len(priority_queue)
        while len(priority_queue) > 1:
            left_freq, _, left = heapq.heappop(priority_queue)
            right_freq, _, right = heapq.heappop(priority_queue)
            merged = HuffmanNode(None, left_freq + right_freq, left, right)
            heapq.heappush(priority_queue, (merged.freq, order, merged))
            order += 1

        return priority_queue[0][2]

    def generate_codes(self, root: HuffmanNode) -> Dict[int, bitarray]:
        if root is None:
            raise ValueError("no tree to generate codes from")
        if root.is_leaf:
            raise ValueError("a single-leaf tree has no non-empty code")

        codes = {}
        stack = [(root, bitarray(endian="big"))]
        while stack:
            node, prefix = stack.pop()
            if node.is_leaf:
                codes[node.symbol] = prefix
                continue
            # right pushed first so the left subtree is visited first
            stack.append((node.right, prefix + bitarray("1", endian="big")))
            stack.append((node.left, prefix + bitarray("0", endian="big")))
        return codes


def is_prefix_free(codes: Mapping[int, bitarray]) -> bool:
    # after sorting, a prefix always sorts directly before some word it prefixes
    words = sorted(code.to01() for code in codes.values())
    return all(not b.startswith(a) for a, b in zip(words, words[1:]))
