from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import List, Optional


VALID_KEYS = {"label", "uppercase", "force", "outputs"}


@dataclass(frozen=True)
class ConvertOptions:
    label: Optional[str] = None
    uppercase: bool = True
    force: bool = False
    outputs: List[Path] = field(default_factory=list)

    def merged(self, **overrides: object) -> "ConvertOptions":
        """Return a copy with every non-None override applied."""

        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)


def _require_dict(value: object, *, where: str) -> dict:
    if not isinstance(value, dict):
        raise ValueError(f"{where} must be an object")
    return value


def _require_bool(value: object, *, where: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{where} must be true or false")
    return value


def _require_str(value: object, *, where: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{where} must be a string")
    return value


def parse_options(raw: object, *, base_dir: Optional[Path] = None) -> ConvertOptions:
    """Validate a decoded JSON options object.

    Relative ``outputs`` paths resolve against ``base_dir`` when given.
    """

    obj = _require_dict(raw, where="options")
    unknown = sorted(set(obj) - VALID_KEYS)
    if unknown:
        raise ValueError(f"options: unknown keys {', '.join(unknown)}")

    label = None
    if obj.get("label") is not None:
        label = _require_str(obj["label"], where="options.label")

    outputs: List[Path] = []
    outputs_raw = obj.get("outputs", [])
    if not isinstance(outputs_raw, list):
        raise ValueError("options.outputs must be an array")
    if len(outputs_raw) > 2:
        raise ValueError("options.outputs accepts at most 2 paths")
    for idx, item in enumerate(outputs_raw):
        path = Path(_require_str(item, where=f"options.outputs[{idx}]"))
        if base_dir is not None and not path.is_absolute():
            path = base_dir / path
        outputs.append(path)

    return ConvertOptions(
        label=label,
        uppercase=_require_bool(obj.get("uppercase", True), where="options.uppercase"),
        force=_require_bool(obj.get("force", False), where="options.force"),
        outputs=outputs,
    )


def load_options(path: Path) -> ConvertOptions:
    path = Path(path)
    raw = json.loads(path.read_text(encoding="utf-8"))
    return parse_options(raw, base_dir=path.parent)
