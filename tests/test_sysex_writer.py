from pathlib import Path
import sys

import mido
import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from conftest import voice_bytes  # noqa: E402
from sci2fb.bank_info import build_bank_info  # noqa: E402
from sci2fb.errors import (  # noqa: E402
    ChecksumMismatch,
    ConversionError,
    InternalShapeError,
)
from sci2fb.nibble import nibblize_bank  # noqa: E402
from sci2fb.sysex import (  # noqa: E402
    BANK_STREAM_SIZE,
    bank_header,
    build_bank_stream,
    parse_bank_stream,
)


def _stream(bank_index: int = 1, label: str = "TEST") -> bytes:
    voices = [voice_bytes(i) for i in range(48)]
    return build_bank_stream(bank_index, build_bank_info(label, bank_index), nibblize_bank(voices))


def test_bank_header_bytes() -> None:
    assert bank_header(1) == bytes.fromhex("F0 43 75 00 00 00 00 00 40")
    assert bank_header(2) == bytes.fromhex("F0 43 75 00 00 00 01 00 40")
    with pytest.raises(ValueError):
        bank_header(0)


@pytest.mark.parametrize("bank_index", [1, 2])
def test_stream_framing(bank_index: int) -> None:
    data = _stream(bank_index)
    assert len(data) == BANK_STREAM_SIZE == 6363
    assert data[:6] == bytes.fromhex("F0 43 75 00 00 00")
    assert data[6] == bank_index - 1
    assert data[7:9] == b"\x00\x40"
    assert data[74:76] == b"\x01\x00"
    assert data[-1] == 0xF7


def test_stream_is_a_single_sysex_message() -> None:
    msg = mido.Message.from_bytes(_stream())
    assert msg.type == "sysex"
    assert len(msg.data) == BANK_STREAM_SIZE - 2
    assert all(0 <= b <= 0x7F for b in msg.data)


def test_voice_packets_placed_every_131_bytes() -> None:
    data = _stream()
    packets = nibblize_bank([voice_bytes(i) for i in range(48)])
    for i, packet in enumerate(packets):
        start = 74 + i * 131
        assert data[start : start + 131] == packet


def test_short_packet_is_rejected() -> None:
    packets = nibblize_bank([voice_bytes(i) for i in range(48)])
    packets[10] = packets[10][:-1]
    with pytest.raises(InternalShapeError):
        build_bank_stream(1, build_bank_info("X", 1), packets)


def test_wrong_packet_count_is_rejected() -> None:
    packets = nibblize_bank([voice_bytes(i) for i in range(48)])
    with pytest.raises(InternalShapeError):
        build_bank_stream(1, build_bank_info("X", 1), packets[:47])


def test_wrong_info_region_size_is_rejected() -> None:
    packets = nibblize_bank([voice_bytes(i) for i in range(48)])
    with pytest.raises(InternalShapeError):
        build_bank_stream(1, build_bank_info("X", 1)[:64], packets)


def test_parse_recovers_label_and_voices() -> None:
    bank = parse_bank_stream(_stream(2, "kq4"))
    assert bank.bank_index == 2
    assert bank.label == "KQ4    2"
    assert bank.info_cleartext[:8] == b"KQ4    2"
    assert bank.voices == [voice_bytes(i) for i in range(48)]
    assert bank.voice_names[0] == "VOICE00"
    assert bank.to_bytes() == _stream(2, "kq4")


def test_parse_detects_voice_checksum_error() -> None:
    data = bytearray(_stream())
    data[74 + 130] ^= 0x01
    with pytest.raises(ChecksumMismatch) as exc:
        parse_bank_stream(bytes(data))
    assert exc.value.packet == "voice 1"


def test_parse_detects_bank_info_checksum_error() -> None:
    data = bytearray(_stream())
    data[9] ^= 0x02
    with pytest.raises(ChecksumMismatch):
        parse_bank_stream(bytes(data))


def test_parse_rejects_missing_end_byte() -> None:
    data = bytearray(_stream())
    data[-1] = 0x00
    with pytest.raises(ConversionError):
        parse_bank_stream(bytes(data))


def test_parse_rejects_wrong_length() -> None:
    with pytest.raises(InternalShapeError):
        parse_bank_stream(_stream()[:-2] + b"\xF7")


def test_parse_rejects_foreign_manufacturer() -> None:
    data = bytearray(_stream())
    data[1] = 0x41
    with pytest.raises(ConversionError):
        parse_bank_stream(bytes(data))
