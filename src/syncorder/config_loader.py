"""Load HarnessConfig from syncorder.yaml if present.

Merges file config with keyword overrides. Overrides win.
"""

from __future__ import annotations

from pathlib import Path

from syncorder._errors import ConfigError
from syncorder.config import HarnessConfig

_KNOWN_KEYS = ("root_url", "label", "eager_check", "max_log_events")


def load_config(root: Path, **overrides: object) -> HarnessConfig:
    """Load HarnessConfig from root, optionally merging syncorder.yaml.

    Looks for syncorder.yaml, syncorder.yml, or syncorder.toml in root. If
    found, loads and merges with overrides. Overrides take precedence.
    """
    file_config = _read_syncorder_config(root)
    merged = {**file_config, **{k: v for k, v in overrides.items() if v is not None}}
    return HarnessConfig(**merged)  # type: ignore[arg-type]


def _read_syncorder_config(root: Path) -> dict[str, object]:
    """Read config from yaml/toml if present. Returns empty dict otherwise."""
    for name in ("syncorder.yaml", "syncorder.yml"):
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / "syncorder.toml"
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    import yaml

    try:
        data = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as e:
        msg = f"Cannot parse {path}: {e}"
        raise ConfigError(msg) from e
    return _flatten_syncorder_section(path, data)


def _parse_toml(path: Path) -> dict[str, object]:
    import tomllib

    try:
        data = tomllib.loads(path.read_text())
    except tomllib.TOMLDecodeError as e:
        msg = f"Cannot parse {path}: {e}"
        raise ConfigError(msg) from e
    return _flatten_syncorder_section(path, data)


def _flatten_syncorder_section(path: Path, data: object) -> dict[str, object]:
    """Extract syncorder.* keys into top-level config."""
    if not isinstance(data, dict):
        msg = f"{path} must contain a mapping at the top level"
        raise ConfigError(msg)
    result: dict[str, object] = {}
    for k, v in data.items():
        if k in _KNOWN_KEYS:
            result[k] = v
    section = data.get("syncorder")
    if isinstance(section, dict):
        for k, v in section.items():
            if k in _KNOWN_KEYS:
                result[k] = v
    return result
