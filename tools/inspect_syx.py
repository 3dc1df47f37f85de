#!/usr/bin/env python3
"""Human-readable report for FB-01 48-voice bank dumps (.syx).

Validates the framing and every checksum, then lists the bank name and
the 48 voice names.
"""

from __future__ import annotations

import argparse
from pathlib import Path
import sys

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

import mido  # noqa: E402

from sci2fb.sysex import BankStream, parse_bank_stream  # noqa: E402


def load_bank(path: Path) -> BankStream:
    messages = mido.read_syx_file(str(path))
    if len(messages) != 1:
        raise ValueError(f"{path}: expected one SysEx message, found {len(messages)}")
    return parse_bank_stream(bytes(messages[0].bin()))


def format_report(path: Path, bank: BankStream) -> list[str]:
    lines = [
        f"file:  {path}",
        f"bank:  {bank.bank_index}",
        f"label: {bank.label!r}",
        "voices:",
    ]
    for idx, name in enumerate(bank.voice_names, start=1):
        lines.append(f"  {idx:2d}  {name}")
    return lines


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Inspect FB-01 bank SysEx files")
    parser.add_argument("files", type=Path, nargs="+", help="Bank .syx files")
    args = parser.parse_args(argv)

    status = 0
    for path in args.files:
        try:
            bank = load_bank(path)
        except (OSError, ValueError) as e:
            print(f"Error: {path}: {e}", file=sys.stderr)
            status = 1
            continue
        print("\n".join(format_report(path, bank)))
    return status


if __name__ == "__main__":
    raise SystemExit(main())
