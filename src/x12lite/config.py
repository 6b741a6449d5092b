"""Run options for the ``show`` listing, loadable from YAML or JSON."""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml


@dataclass
class ShowConfig:
    after: str | None = None  # YYYYMMDD or "YYYYMMDD HHMMSS"
    count: bool = False  # total messages at the end
    dive: bool = False  # recurse into directories
    ignore: bool = False  # skip malformed files instead of aborting
    lower: bool = False  # segment tags in lowercase
    message: bool = False  # print the message body above the listing
    path: bool = False  # banner with the path of each file
    spacer: bool = False  # blank line between messages
    deep: bool = False  # one line per repetition
    only: bool = False  # first occurrence of each segment tag only
    hide: bool = False  # suppress the field listing
    ansi: bool = False  # highlight values with ANSI colours
    tab: bool = False  # tab between label and value instead of padding
    left: int = 15  # label column width
    foreground: str = "fff"
    background: str = "369"

    @staticmethod
    def from_mapping(payload: dict[str, Any]) -> ShowConfig:
        known = {f.name for f in dataclasses.fields(ShowConfig)}
        unknown = sorted(set(payload) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        return ShowConfig(**payload)

    def merged(self, **overrides: Any) -> ShowConfig:
        """Overlay options that were set on the command line (``None``/``False`` are unset)."""
        chosen = {k: v for k, v in overrides.items() if v is not None and v is not False}
        return dataclasses.replace(self, **chosen)


def load_config(path: Path) -> ShowConfig:
    if path.suffix.lower() in {".yml", ".yaml"}:
        payload = yaml.safe_load(path.read_text()) or {}
    else:
        payload = json.loads(path.read_text())
    return ShowConfig.from_mapping(payload)
