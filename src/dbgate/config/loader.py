"""YAML settings loading and validation."""

from __future__ import annotations

from pathlib import Path

import yaml

from dbgate.config.schema import GateSettings


def load_settings_yaml(path: str | Path) -> GateSettings:
    """Load a settings YAML file (same format as dbgate.yaml) and validate it."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Settings YAML not found: {path}")

    with open(path) as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict):
        raise ValueError(f"Expected YAML mapping, got {type(raw).__name__} in {path}")

    return GateSettings(**raw)
