#!/usr/bin/env python3
"""Convert a Sierra SCI0 FB-01 patch resource into FB-01 SysEx bank files.

Examples
--------
    python tools/sci2fb_convert.py patch.002
    python tools/sci2fb_convert.py kq4 -o KQ4A.syx KQ4B.syx --label kq4
    python tools/sci2fb_convert.py patch.002 --config options.json --force
"""

from __future__ import annotations

import argparse
from pathlib import Path
import sys

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from sci2fb.convert import convert_patch  # noqa: E402
from sci2fb.options import ConvertOptions, load_options  # noqa: E402
from sci2fb.output import commit_outputs  # noqa: E402
from sci2fb.patch import PatchShape, read_patch  # noqa: E402

VERSION = "1.01"
PATCH_EXTENSIONS = (".pat", ".002")


def resolve_input(name: Path) -> Path:
    """Return ``name`` or, when it does not exist, ``name.pat`` / ``name.002``."""

    if name.exists():
        return name
    for ext in PATCH_EXTENSIONS:
        candidate = name.with_name(name.name + ext)
        if candidate.exists():
            return candidate
    raise FileNotFoundError(f"file {name} not found (also tried {', '.join(PATCH_EXTENSIONS)})")


def _pick_outputs(input_path: Path, shape: PatchShape, given: list[Path]) -> list[Path]:
    if shape is PatchShape.SINGLE_BANK:
        if len(given) > 1:
            raise ValueError("single-bank patch produces one bank file; got two output names")
        return given or [input_path.with_name(f"{input_path.stem}.syx")]

    if len(given) == 2:
        return given
    if len(given) == 1:
        first = given[0]
        if not first.suffix:
            first = first.with_suffix(".syx")
        return [first, first.with_name(f"{first.stem}_2{first.suffix}")]
    stem = input_path.stem
    return [
        input_path.with_name(f"{stem}_1.syx"),
        input_path.with_name(f"{stem}_2.syx"),
    ]


def default_outputs(input_path: Path, shape: PatchShape, given: list[Path]) -> list[Path]:
    outputs = _pick_outputs(input_path, shape, given)
    if len({path.resolve() for path in outputs}) != len(outputs):
        raise ValueError(f"both banks would be written to the same file {outputs[0]}")
    return outputs


def confirm_overwrite(paths: list[Path], force: bool) -> bool:
    for path in paths:
        if path.exists() and not force:
            try:
                response = input(f'Warning: "{path}" already exists. Overwrite? (y/n): ')
            except EOFError:
                print()
                return False
            if response.strip().lower() != "y":
                return False
    return True


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert an SCI0 FB-01 patch resource into FB-01 SysEx bank files",
    )
    parser.add_argument("patch", type=Path, help="Patch resource (extension .pat/.002 may be omitted)")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        nargs="+",
        default=None,
        metavar="BANKFILE",
        help="Output bank file(s); two for a two-bank patch",
    )
    parser.add_argument("-l", "--label", default=None, help="Bank name shown on the FB-01 (default: patch file name)")
    parser.add_argument(
        "--keep-case",
        action="store_true",
        help="Do not uppercase the bank name (1.00 behaviour)",
    )
    parser.add_argument("-c", "--config", type=Path, default=None, help="JSON options file")
    parser.add_argument("-f", "--force", action="store_true", help="Overwrite existing files without asking")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only report errors")
    parser.add_argument("--version", action="version", version=f"SCI2FB v{VERSION}")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    def say(msg: str) -> None:
        if not args.quiet:
            print(msg)

    say(f"SCI2FB v{VERSION}")

    try:
        options = load_options(args.config) if args.config is not None else ConvertOptions()
        if args.output is not None and len(args.output) > 2:
            parser.error("at most two output files may be given")
        options = options.merged(
            label=args.label,
            uppercase=False if args.keep_case else None,
            force=True if args.force else None,
            outputs=args.output,
        )

        input_path = resolve_input(args.patch)
        with input_path.open("rb") as fh:
            patch = read_patch(fh)
        say("SCI patch resource header detected")
        if patch.shape is PatchShape.DOUBLE_BANK:
            say("Bank separator bytes found. Input patch file holds two banks (96 voices)")
        else:
            say("Input patch file holds one bank (48 voices)")

        try:
            outputs = default_outputs(input_path, patch.shape, list(options.outputs))
        except ValueError as exc:
            parser.error(str(exc))

        if not confirm_overwrite(outputs, options.force):
            say("Conversion cancelled.")
            return 0

        label = options.label if options.label is not None else input_path.stem
        result = convert_patch(patch, label, uppercase=options.uppercase)
        banks = result.banks
        written = commit_outputs(list(zip(outputs, banks)))
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for path, data in zip(written, banks):
        say(f"Wrote {len(data)} bytes -> {path}")
    say("FB-01 sysex banks created successfully!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
