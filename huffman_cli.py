#!/usr/bin/env python3
"""
huffman_cli.py : compress or decompress a single file with static Huffman coding

Usage:
    huffzip compress input.bin output.huf
    huffzip decompress output.huf restored.bin
    huffzip -v compress input.bin output.huf      # debug logging
    huffzip --strict compress empty.bin out.huf    # refuse empty inputs
"""

import argparse
import logging
import sys

from huffman_errors import HuffmanError
from huffman_service import HuffmanService, compress_file, decompress_file

logger = logging.getLogger("huffzip")


def build_parser():
    parser = argparse.ArgumentParser(prog="huffzip", description="Static Huffman file compressor")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="log debug details")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="only log errors")
    parser.add_argument("--strict", action="store_true", help="fail instead of writing an empty container")
    parser.add_argument("mode", choices=("compress", "decompress"))
    parser.add_argument("src", help="file to read")
    parser.add_argument("dst", help="file to create or overwrite")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    service = HuffmanService(allow_empty=not args.strict)
    run = compress_file if args.mode == "compress" else decompress_file
    try:
        before, after = run(args.src, args.dst, service=service)
    except HuffmanError as e:
        logger.error("%s failed: %s", args.mode, e)
        return 1

    if args.mode == "compress" and before:
        logger.info("ratio %.2f%%", 100.0 * after / before)
    return 0


if __name__ == "__main__":
    sys.exit(main())
