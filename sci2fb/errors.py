"""Error types raised while converting an SCI patch into FB-01 bank dumps."""

from __future__ import annotations


class ConversionError(ValueError):
    """Base class for every failure of a single conversion."""


class InvalidMagic(ConversionError):
    def __init__(self, found: int) -> None:
        self.found = found
        super().__init__(f"not an SCI patch resource (byte 0 is 0x{found:02X}, expected 0x89)")


class UnexpectedLength(ConversionError):
    def __init__(self, actual: int, title_length: int) -> None:
        self.actual = actual
        self.title_length = title_length
        super().__init__(
            f"unexpected patch size {actual} bytes with title length {title_length} "
            f"(expected {3074 + title_length} or {6148 + title_length})"
        )


class MissingBankSeparator(ConversionError):
    def __init__(self, found: bytes) -> None:
        self.found = bytes(found)
        super().__init__(
            f"bank separator AB CD missing (found {self.found.hex(' ').upper() or 'nothing'})"
        )


class TruncatedInput(ConversionError):
    def __init__(self, offset: int, wanted: int, got: int) -> None:
        self.offset = offset
        self.wanted = wanted
        self.got = got
        super().__init__(
            f"input ended early at offset 0x{offset:X}: wanted {wanted} bytes, got {got}"
        )


class InternalShapeError(ConversionError):
    """A stage produced or received a block of the wrong size."""

    def __init__(self, what: str, expected: int, actual: int) -> None:
        self.what = what
        self.expected = expected
        self.actual = actual
        super().__init__(f"{what}: expected size {expected}, got {actual}")


class ChecksumMismatch(ConversionError):
    def __init__(self, packet: str, expected: int, found: int) -> None:
        self.packet = packet
        self.expected = expected
        self.found = found
        super().__init__(
            f"{packet}: checksum 0x{found:02X} does not match computed 0x{expected:02X}"
        )
