from pathlib import Path
import sys
from typing import Callable, Optional

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


def voice_bytes(index: int) -> bytes:
    """A distinct 64-byte voice: 7-char name, then a byte ramp."""

    name = f"VOICE{index:02d}".encode("ascii")[:7]
    body = bytes((index * 7 + i) & 0xFF for i in range(64 - len(name)))
    return name + body


def build_patch(
    *,
    banks: int = 1,
    title: bytes = b"",
    fill: Optional[int] = None,
    separator: bytes = b"\xAB\xCD",
) -> bytes:
    voices = []
    for i in range(48 * banks):
        voices.append(bytes([fill]) * 64 if fill is not None else voice_bytes(i))
    out = bytearray([0x89, len(title)])
    out += title
    out += b"".join(voices[:48])
    if banks == 2:
        out += separator
        out += b"".join(voices[48:])
    return bytes(out)


@pytest.fixture
def make_patch() -> Callable[..., bytes]:
    return build_patch
