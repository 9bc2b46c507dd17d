"""Converter settings.

Settings come from built-in defaults, an optional hurl2bruno.yaml file and
CLI options, in increasing order of precedence.

Example hurl2bruno.yaml:

    source_dir: api/hurl
    output_dir: api/bruno
    collection_name: RealWorld API
    host: http://localhost:3000
"""

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from hurl2bruno.exceptions import SettingsParseException, SettingsValidationException

DEFAULT_SETTINGS_FILE = "hurl2bruno.yaml"


@dataclass
class ConverterSettings:
    """Settings for collection generation.

    Attributes:
        source_dir: Directory holding the .hurl files
        output_dir: Root of the Bruno collection
        collection_name: Name written to bruno.json
        host: Default host in the local environment
        run_id_variable: Variable seeded once per run by collection.bru
    """

    source_dir: str = "api/hurl"
    output_dir: str = "api/bruno"
    collection_name: str = "RealWorld API"
    host: str = "http://localhost:3000"
    run_id_variable: str = "uid"

    def with_overrides(self, **overrides: Optional[str]) -> "ConverterSettings":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


def load_settings(settings_path: Optional[Union[str, Path]] = None) -> ConverterSettings:
    """Load settings from a YAML file.

    Args:
        settings_path: Explicit settings file. When None, hurl2bruno.yaml in
            the working directory is used if it exists.

    Returns:
        ConverterSettings with file values applied over the defaults

    Raises:
        FileNotFoundError: Explicit settings file doesn't exist
        SettingsParseException: YAML is invalid or not a mapping
        SettingsValidationException: Unknown keys or invalid values
    """
    if settings_path is None:
        default = Path(DEFAULT_SETTINGS_FILE)
        if not default.is_file():
            return ConverterSettings()
        settings_path = default

    path = Path(settings_path)
    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {settings_path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SettingsParseException(f"Invalid YAML syntax in {settings_path}: {e}")

    if data is None:
        return ConverterSettings()
    if not isinstance(data, dict):
        raise SettingsParseException(
            f"Invalid settings format in {settings_path}: expected dictionary"
        )

    return _parse_settings(data, str(settings_path))


def _parse_settings(data: dict, settings_path: str) -> ConverterSettings:
    """Validate a settings mapping and build ConverterSettings."""
    known = {f.name for f in fields(ConverterSettings)}
    unknown = sorted(str(k) for k in data if k not in known)
    if unknown:
        raise SettingsValidationException(
            f"Unknown settings in {settings_path}: {', '.join(unknown)}"
        )

    for key, value in data.items():
        if not isinstance(value, str) or not value.strip():
            raise SettingsValidationException(
                f"Invalid '{key}' in {settings_path}: expected non-empty string"
            )

    return ConverterSettings(**data)
