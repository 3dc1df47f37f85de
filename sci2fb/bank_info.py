"""Bank-info packet: the 32-byte block naming a bank on the FB-01 display.

Cleartext layout::

    0..7   bank name, ASCII, space padded
           (two-bank dumps: 7 name characters + '1' or '2')
    8..31  zero

On the wire it is nibblized to 64 bytes and followed by a checksum.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import InternalShapeError
from .nibble import checksum, denibblize, nibblize


BANK_INFO_SIZE = 32
BANK_INFO_NIBBLE_SIZE = BANK_INFO_SIZE * 2  # 64
BANK_INFO_REGION_SIZE = BANK_INFO_NIBBLE_SIZE + 1  # 65
LABEL_WIDTH = 8
PAD = 0x20


def bank_label(label: str, bank_index: Optional[int] = None, *, uppercase: bool = True) -> bytes:
    """Return the 8-byte name field for a bank.

    With ``bank_index`` set (two-bank dumps) the last byte carries the bank
    digit and only 7 characters of ``label`` fit. Case mapping only touches
    ASCII letters; anything outside Latin-1 becomes ``?``.
    """

    if bank_index is not None and bank_index not in (1, 2):
        raise ValueError(f"bank index must be 1 or 2, got {bank_index}")

    raw = label.encode("latin-1", errors="replace")
    if uppercase:
        raw = raw.upper()
    width = LABEL_WIDTH if bank_index is None else LABEL_WIDTH - 1
    name = raw[:width].ljust(width, bytes([PAD]))
    if bank_index is not None:
        name += bytes([0x30 + bank_index])
    return name


@dataclass(frozen=True)
class BankInfo:
    cleartext: bytes

    @classmethod
    def for_label(cls, label: str, bank_index: Optional[int] = None, *, uppercase: bool = True) -> "BankInfo":
        name = bank_label(label, bank_index, uppercase=uppercase)
        return cls(cleartext=name.ljust(BANK_INFO_SIZE, b"\x00"))

    @classmethod
    def from_region(cls, region: bytes) -> "BankInfo":
        if len(region) != BANK_INFO_REGION_SIZE:
            raise InternalShapeError("bank-info region", BANK_INFO_REGION_SIZE, len(region))
        return cls(cleartext=denibblize(region[:BANK_INFO_NIBBLE_SIZE]))

    @property
    def name(self) -> str:
        return self.cleartext[:LABEL_WIDTH].decode("latin-1").rstrip(" \x00")

    def to_region(self) -> bytes:
        if len(self.cleartext) != BANK_INFO_SIZE:
            raise InternalShapeError("bank-info cleartext", BANK_INFO_SIZE, len(self.cleartext))
        nibbles = nibblize(self.cleartext)
        return nibbles + bytes([checksum(nibbles)])


def build_bank_info(label: str, bank_index: Optional[int] = None, *, uppercase: bool = True) -> bytes:
    """Return the 65-byte on-wire bank-info region (nibbles + checksum)."""

    return BankInfo.for_label(label, bank_index, uppercase=uppercase).to_region()
