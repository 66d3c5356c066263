"""Load WhiskerConfig from whisker.yaml if present.

Merges file config with CLI kwargs. CLI overrides file.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

import yaml

from whisker._errors import ConfigError
from whisker.config import WhiskerConfig

# Flat keys accepted at the top level or under a ``whisker:`` section
_FLAT_KEYS = frozenset({
    "output", "pages_dir", "static_dir", "assets_dir", "build_dir",
    "public_path", "router_mode", "generate_routes", "interval",
    "concurrency", "minify", "do_build", "route_timeout",
})

# Nested section keys -> flat WhiskerConfig field
_SECTION_KEYS: dict[str, dict[str, str]] = {
    "router": {"mode": "router_mode"},
    "generate": {
        "dir": "output",
        "routes": "generate_routes",
        "interval": "interval",
        "concurrency": "concurrency",
        "minify": "minify",
        "timeout": "route_timeout",
    },
    "build": {
        "dir": "build_dir",
        "public_path": "public_path",
        "do_build": "do_build",
    },
}


def load_config(root: Path, **overrides: object) -> WhiskerConfig:
    """Load WhiskerConfig from root, optionally merging whisker.yaml.

    Looks for whisker.yaml, whisker.yml, or whisker.toml in root. If found,
    loads and merges with overrides. Overrides take precedence.

    Raises:
        ConfigError: If the config file cannot be parsed.

    """
    file_config = _read_whisker_config(root)
    merged = {**file_config, **overrides}
    if "output" in merged and not isinstance(merged["output"], Path):
        merged["output"] = Path(str(merged["output"]))
    try:
        return WhiskerConfig(root=root, **merged)
    except TypeError as exc:
        msg = f"Invalid configuration in {root}: {exc}"
        raise ConfigError(msg) from exc


def _read_whisker_config(root: Path) -> dict[str, object]:
    """Read whisker config from yaml/toml if present. Returns empty dict otherwise."""
    for name in ("whisker.yaml", "whisker.yml"):
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / "whisker.toml"
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        msg = f"Failed to parse {path}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_sections(data, path)


def _parse_toml(path: Path) -> dict[str, object]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Failed to parse {path}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_sections(data, path)


def _flatten_sections(data: object, path: Path) -> dict[str, object]:
    """Map ``router``/``generate``/``build`` sections onto flat config keys."""
    if not isinstance(data, dict):
        msg = f"{path}: expected a mapping at the top level"
        raise ConfigError(msg)

    result: dict[str, object] = {}
    whisker = data.get("whisker")
    if isinstance(whisker, dict):
        result.update((k, v) for k, v in whisker.items() if k in _FLAT_KEYS)

    for key, value in data.items():
        if key in _FLAT_KEYS:
            result[key] = value
        elif key in _SECTION_KEYS:
            if not isinstance(value, dict):
                msg = f"{path}: section {key!r} must be a mapping"
                raise ConfigError(msg)
            fields = _SECTION_KEYS[key]
            for sub_key, sub_value in value.items():
                if sub_key in fields:
                    result[fields[sub_key]] = sub_value
    return result
