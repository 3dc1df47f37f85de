"""Reader for Sierra SCI0 FB-01 patch resources (``patch.002``).

Layout::

    0x00     1      magic 0x89
    0x01     1      title length T
    0x02     T      title bytes
    0x02+T   48*64  bank A voices
    0xC02+T  2      separator AB CD          (two-bank files only)
    0xC04+T  48*64  bank B voices            (two-bank files only)

This is the only module that deals in absolute input offsets; voice bytes
are handed on untouched.
"""

from __future__ import annotations

import io
import os
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, List

from .errors import (
    InternalShapeError,
    InvalidMagic,
    MissingBankSeparator,
    TruncatedInput,
    UnexpectedLength,
)


MAGIC = 0x89
HEADER_SIZE = 2  # magic + title length
VOICE_SIZE = 64
VOICES_PER_BANK = 48
BANK_SIZE = VOICES_PER_BANK * VOICE_SIZE  # 0xC00
BANK_SEPARATOR = b"\xAB\xCD"
SINGLE_BANK_BASE = HEADER_SIZE + BANK_SIZE  # 3074
DOUBLE_BANK_BASE = SINGLE_BANK_BASE + len(BANK_SEPARATOR) + BANK_SIZE  # 6148


class PatchShape(Enum):
    SINGLE_BANK = 1
    DOUBLE_BANK = 2

    @property
    def bank_count(self) -> int:
        return self.value

    @property
    def voice_count(self) -> int:
        return self.value * VOICES_PER_BANK

    def expected_length(self, title_length: int) -> int:
        base = SINGLE_BANK_BASE if self is PatchShape.SINGLE_BANK else DOUBLE_BANK_BASE
        return base + title_length


@dataclass(frozen=True)
class PatchHeader:
    shape: PatchShape
    title_length: int
    length: int

    @property
    def voices_offset(self) -> int:
        return HEADER_SIZE + self.title_length

    @property
    def separator_offset(self) -> int:
        return self.voices_offset + BANK_SIZE


@dataclass(frozen=True)
class PatchResource:
    """A validated patch resource, voices in file order (bank A then bank B)."""

    title_length: int
    title_bytes: bytes
    shape: PatchShape
    voices: List[bytes]

    @property
    def bank_count(self) -> int:
        return self.shape.bank_count

    def bank(self, index: int) -> List[bytes]:
        """Return the 48 voices of bank ``index`` (1 or 2)."""

        if not 1 <= index <= self.bank_count:
            raise IndexError(f"bank {index} out of range for a {self.bank_count}-bank patch")
        start = (index - 1) * VOICES_PER_BANK
        return self.voices[start : start + VOICES_PER_BANK]

    @classmethod
    def from_bytes(cls, data: bytes) -> "PatchResource":
        return read_patch(io.BytesIO(data))


def _read_exact(source: BinaryIO, offset: int, size: int) -> bytes:
    source.seek(offset)
    chunk = source.read(size)
    if len(chunk) != size:
        raise TruncatedInput(offset, size, len(chunk))
    return chunk


def _source_length(source: BinaryIO) -> int:
    end = source.seek(0, os.SEEK_END)
    source.seek(0)
    return end


def identify(source: BinaryIO) -> PatchHeader:
    """Check magic and total length; return the detected shape."""

    source.seek(0)
    head = source.read(HEADER_SIZE)
    if head[:1] and head[0] != MAGIC:
        raise InvalidMagic(head[0])
    if len(head) < HEADER_SIZE:
        raise TruncatedInput(0, HEADER_SIZE, len(head))

    title_length = head[1]
    length = _source_length(source)
    for shape in PatchShape:
        if length == shape.expected_length(title_length):
            return PatchHeader(shape=shape, title_length=title_length, length=length)
    raise UnexpectedLength(length, title_length)


def extract_voices(source: BinaryIO, header: PatchHeader) -> List[bytes]:
    voices: List[bytes] = []
    pos = header.voices_offset
    for bank in range(header.shape.bank_count):
        if bank == 1:
            source.seek(pos)
            separator = source.read(len(BANK_SEPARATOR))
            if separator != BANK_SEPARATOR:
                if len(separator) != len(BANK_SEPARATOR):
                    raise TruncatedInput(pos, len(BANK_SEPARATOR), len(separator))
                raise MissingBankSeparator(separator)
            pos += len(BANK_SEPARATOR)
        for _ in range(VOICES_PER_BANK):
            voices.append(_read_exact(source, pos, VOICE_SIZE))
            pos += VOICE_SIZE

    if len(voices) != header.shape.voice_count:
        raise InternalShapeError("voice table", header.shape.voice_count, len(voices))
    return voices


def read_patch(source: BinaryIO) -> PatchResource:
    header = identify(source)
    title = _read_exact(source, HEADER_SIZE, header.title_length)
    voices = extract_voices(source, header)
    return PatchResource(
        title_length=header.title_length,
        title_bytes=title,
        shape=header.shape,
        voices=voices,
    )
