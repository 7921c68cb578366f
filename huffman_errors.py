# filename: huffman_errors.py


class HuffmanError(Exception):
    """Base class for every failure raised by the compressor."""


class IoUnavailable(HuffmanError):
    """The source could not be read or the destination could not be written."""


class EmptyInput(HuffmanError):
    """Raised by a strict service when asked to compress nothing."""


class ContainerError(HuffmanError, ValueError):
    """The container image is corrupt, truncated or was not produced by us."""


class MalformedHeader(ContainerError):
    pass


class InvalidPadding(ContainerError):
    pass


class TruncatedBitstream(ContainerError):
    pass


class FrequencyOverflow(HuffmanError):
    """A symbol occurs more often than the int32 frequency field can record."""
