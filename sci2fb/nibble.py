"""FB-01 nibble encoding.

Each data byte travels as two bytes, low nibble first::

    b  ->  (b & 0x0F), (b >> 4) & 0x0F

so the receiver rebuilds byte ``k`` as ``stream[2k+1] << 4 | stream[2k]``.
Every nibblized packet is followed by a checksum: the two's complement
of the 8-bit sum of the nibble bytes, masked to 7 bits.

A voice packet on the wire is ``01 00`` (size 128, as a 7-bit pair)
followed by 128 nibble bytes and the checksum, 131 bytes in total.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence

from .errors import InternalShapeError
from .patch import VOICE_SIZE, VOICES_PER_BANK


VOICE_PACKET_PREFIX = b"\x01\x00"
VOICE_NIBBLE_SIZE = VOICE_SIZE * 2  # 128
VOICE_PACKET_SIZE = len(VOICE_PACKET_PREFIX) + VOICE_NIBBLE_SIZE + 1  # 131


def nibblize(data: bytes) -> bytes:
    out = bytearray(len(data) * 2)
    out[0::2] = bytes(b & 0x0F for b in data)
    out[1::2] = bytes((b >> 4) & 0x0F for b in data)
    return bytes(out)


def denibblize(nibbles: bytes) -> bytes:
    if len(nibbles) % 2:
        raise ValueError(f"nibble stream has odd length {len(nibbles)}")
    return bytes(
        ((hi & 0x0F) << 4) | (lo & 0x0F)
        for lo, hi in zip(nibbles[0::2], nibbles[1::2])
    )


def checksum(packet: Iterable[int]) -> int:
    total = sum(packet) & 0xFF
    return ((~total) + 1) & 0x7F


@dataclass(frozen=True)
class VoicePacket:
    nibbles: bytes
    checksum: int

    @classmethod
    def from_voice(cls, voice: bytes) -> "VoicePacket":
        if len(voice) != VOICE_SIZE:
            raise InternalShapeError("voice block", VOICE_SIZE, len(voice))
        nibbles = nibblize(voice)
        return cls(nibbles=nibbles, checksum=checksum(nibbles))

    @property
    def voice(self) -> bytes:
        return denibblize(self.nibbles)

    def to_bytes(self) -> bytes:
        packet = VOICE_PACKET_PREFIX + self.nibbles + bytes([self.checksum])
        if len(packet) != VOICE_PACKET_SIZE:
            raise InternalShapeError("voice packet", VOICE_PACKET_SIZE, len(packet))
        return packet


def nibblize_voice(voice: bytes) -> bytes:
    return VoicePacket.from_voice(voice).to_bytes()


def nibblize_bank(voices: Sequence[bytes]) -> List[bytes]:
    """Encode one bank of 48 voices into 131-byte packets, order preserved."""

    if len(voices) != VOICES_PER_BANK:
        raise InternalShapeError("bank voice count", VOICES_PER_BANK, len(voices))
    return [nibblize_voice(voice) for voice in voices]
