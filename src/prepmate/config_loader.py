"""Persist and load extraction settings overrides."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict

from prepmate.config import ExtractionSettings


@dataclass
class SettingsProfile:
    overrides: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path) -> "SettingsProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        overrides = data.get("overrides", {}) if isinstance(data, dict) else None
        if not isinstance(overrides, dict):
            raise ValueError("expected a JSON object with an 'overrides' mapping")
        return cls(overrides=dict(overrides))

    @classmethod
    def from_settings(cls, settings: ExtractionSettings) -> "SettingsProfile":
        defaults = asdict(ExtractionSettings())
        current = asdict(settings)
        return cls(overrides={key: value for key, value in current.items() if defaults[key] != value})

    def apply(self, base: ExtractionSettings) -> ExtractionSettings:
        return base.with_overrides(self.overrides)

    def save(self, path: Path) -> None:
        payload = {"overrides": self.overrides}
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
