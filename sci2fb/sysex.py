"""FB-01 48-voice bank dump framing.

Offsets within one bank stream::

    0      7     F0 43 75 00 00 00 NN      NN = 00 bank 1, 01 bank 2
    7      2     00 40                     bank-info packet size (64)
    9      64    bank-info nibbles
    73     1     bank-info checksum
    74     6288  48 voice packets (01 00 + 128 nibbles + checksum)
    6362   1     F7

Total 6363 bytes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

import mido

from .bank_info import BANK_INFO_NIBBLE_SIZE, BANK_INFO_REGION_SIZE, BankInfo
from .errors import ChecksumMismatch, ConversionError, InternalShapeError
from .nibble import (
    VOICE_NIBBLE_SIZE,
    VOICE_PACKET_PREFIX,
    VOICE_PACKET_SIZE,
    VoicePacket,
    checksum,
)
from .patch import VOICES_PER_BANK


SYSEX_START = 0xF0
SYSEX_END = 0xF7
BANK_HEADER_PREFIX = bytes([SYSEX_START, 0x43, 0x75, 0x00, 0x00, 0x00])
BANK_INFO_PREFIX = b"\x00\x40"
BANK_HEADER_SIZE = len(BANK_HEADER_PREFIX) + 1 + len(BANK_INFO_PREFIX)  # 9
VOICES_OFFSET = BANK_HEADER_SIZE + BANK_INFO_REGION_SIZE  # 74
BANK_STREAM_SIZE = VOICES_OFFSET + VOICES_PER_BANK * VOICE_PACKET_SIZE + 1  # 6363
VOICE_NAME_SIZE = 7


def bank_header(bank_index: int) -> bytes:
    if bank_index not in (1, 2):
        raise ValueError(f"bank index must be 1 or 2, got {bank_index}")
    return BANK_HEADER_PREFIX + bytes([bank_index - 1]) + BANK_INFO_PREFIX


def build_bank_stream(bank_index: int, info_region: bytes, packets: Sequence[bytes]) -> bytes:
    """Assemble a complete bank dump from already encoded parts."""

    if len(info_region) != BANK_INFO_REGION_SIZE:
        raise InternalShapeError("bank-info region", BANK_INFO_REGION_SIZE, len(info_region))
    if len(packets) != VOICES_PER_BANK:
        raise InternalShapeError("voice packet count", VOICES_PER_BANK, len(packets))
    for packet in packets:
        if len(packet) != VOICE_PACKET_SIZE:
            raise InternalShapeError("voice packet", VOICE_PACKET_SIZE, len(packet))

    parts = [bank_header(bank_index), info_region]
    parts.extend(packets)
    parts.append(bytes([SYSEX_END]))
    stream = b"".join(parts)
    if len(stream) != BANK_STREAM_SIZE:
        raise InternalShapeError("bank stream", BANK_STREAM_SIZE, len(stream))
    return stream


@dataclass(frozen=True)
class BankStream:
    """A bank dump split back into its framed parts."""

    bank_index: int
    info: BankInfo
    packets: List[VoicePacket]

    @property
    def label(self) -> str:
        return self.info.name

    @property
    def info_cleartext(self) -> bytes:
        return self.info.cleartext

    @property
    def voices(self) -> List[bytes]:
        return [packet.voice for packet in self.packets]

    @property
    def voice_names(self) -> List[str]:
        # First 7 bytes of an FB-01 voice hold its name.
        return [
            voice[:VOICE_NAME_SIZE].decode("ascii", errors="replace").rstrip(" \x00")
            for voice in self.voices
        ]

    def to_bytes(self) -> bytes:
        return build_bank_stream(
            self.bank_index,
            self.info.to_region(),
            [packet.to_bytes() for packet in self.packets],
        )


def _check(packet: str, nibbles: bytes, found: int) -> None:
    expected = checksum(nibbles)
    if expected != found:
        raise ChecksumMismatch(packet, expected, found)


def parse_bank_stream(data: bytes) -> BankStream:
    """Validate a bank dump and split it into bank info and voice packets."""

    if len(data) != BANK_STREAM_SIZE:
        raise InternalShapeError("bank stream", BANK_STREAM_SIZE, len(data))
    try:
        message = mido.Message.from_bytes(data)
    except ValueError as exc:
        raise ConversionError(f"not a valid SysEx message: {exc}") from exc
    if message.type != "sysex":
        raise ConversionError(f"expected a sysex message, got {message.type}")

    if data[: len(BANK_HEADER_PREFIX)] != BANK_HEADER_PREFIX:
        raise ConversionError(
            f"not an FB-01 bank dump header: {data[:len(BANK_HEADER_PREFIX)].hex(' ').upper()}"
        )
    bank_byte = data[len(BANK_HEADER_PREFIX)]
    if bank_byte not in (0, 1):
        raise ConversionError(f"bank byte 0x{bank_byte:02X} is neither bank 1 nor bank 2")
    if data[7:9] != BANK_INFO_PREFIX:
        raise ConversionError(f"bank-info size prefix is {data[7:9].hex(' ').upper()}, expected 00 40")

    region = data[BANK_HEADER_SIZE:VOICES_OFFSET]
    _check("bank info", region[:BANK_INFO_NIBBLE_SIZE], region[-1])
    info = BankInfo.from_region(region)

    packets: List[VoicePacket] = []
    for i in range(VOICES_PER_BANK):
        start = VOICES_OFFSET + i * VOICE_PACKET_SIZE
        raw = data[start : start + VOICE_PACKET_SIZE]
        if raw[: len(VOICE_PACKET_PREFIX)] != VOICE_PACKET_PREFIX:
            raise ConversionError(
                f"voice {i + 1}: size prefix is {raw[:2].hex(' ').upper()}, expected 01 00"
            )
        nibbles = raw[len(VOICE_PACKET_PREFIX) : len(VOICE_PACKET_PREFIX) + VOICE_NIBBLE_SIZE]
        _check(f"voice {i + 1}", nibbles, raw[-1])
        packets.append(VoicePacket(nibbles=nibbles, checksum=raw[-1]))

    return BankStream(bank_index=bank_byte + 1, info=info, packets=packets)
