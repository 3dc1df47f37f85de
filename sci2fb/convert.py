"""Patch resource -> FB-01 bank dump conversion."""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, List, Optional, Union

from .bank_info import build_bank_info
from .nibble import nibblize_bank
from .patch import PatchResource, PatchShape, read_patch
from .sysex import build_bank_stream


@dataclass(frozen=True)
class SingleBank:
    bank: bytes

    @property
    def banks(self) -> List[bytes]:
        return [self.bank]


@dataclass(frozen=True)
class DoubleBank:
    bank_a: bytes
    bank_b: bytes

    @property
    def banks(self) -> List[bytes]:
        return [self.bank_a, self.bank_b]


ConversionResult = Union[SingleBank, DoubleBank]


def encode_bank(voices: List[bytes], label: str, bank_index: int, *, numbered: bool, uppercase: bool = True) -> bytes:
    """Encode 48 voices as bank ``bank_index``.

    ``numbered`` selects the two-bank label form (7 characters + bank digit).
    """

    info = build_bank_info(label, bank_index if numbered else None, uppercase=uppercase)
    return build_bank_stream(bank_index, info, nibblize_bank(voices))


def convert_patch(patch: PatchResource, label_hint: str, *, uppercase: bool = True) -> ConversionResult:
    if patch.shape is PatchShape.SINGLE_BANK:
        return SingleBank(bank=encode_bank(patch.bank(1), label_hint, 1, numbered=False, uppercase=uppercase))
    return DoubleBank(
        bank_a=encode_bank(patch.bank(1), label_hint, 1, numbered=True, uppercase=uppercase),
        bank_b=encode_bank(patch.bank(2), label_hint, 2, numbered=True, uppercase=uppercase),
    )


def convert(source: Union[bytes, bytearray, BinaryIO], label_hint: str, *, uppercase: bool = True) -> ConversionResult:
    """Convert a whole patch resource into one or two bank dumps.

    ``source`` is either the file contents or a seekable binary stream.
    Raises a ``ConversionError`` subclass on malformed input; nothing is
    returned for partially converted data.
    """

    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(bytes(source))
    return convert_patch(read_patch(source), label_hint, uppercase=uppercase)


def convert_file(path: Union[str, Path], label_hint: Optional[str] = None, *, uppercase: bool = True) -> ConversionResult:
    """Convert the patch at ``path``; the label defaults to the file stem."""

    path = Path(path)
    label = label_hint if label_hint is not None else path.stem
    with path.open("rb") as fh:
        return convert(fh, label, uppercase=uppercase)
