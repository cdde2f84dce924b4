from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.layout import DEFAULT_LAYOUT, ColumnLayout
from ..table.reader import DEFAULT_ENCODING

"""Config loader.

Responsibilities:
- Load YAML config (default config/keepcard.yml)
- Validate against the bundled JSON schema
- Apply defaults for every missing key

Row/column offsets of the export are not configurable; only the optional
header labels used for the header check are.
"""

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/keepcard.yml")
DEFAULT_TITLE = "キープカード"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class AppConfig:
    encoding: str = DEFAULT_ENCODING
    output_directory: str = "./output"
    log_directory: str = "./logs"
    document_title: str = DEFAULT_TITLE
    header_labels: dict[str, str] | None = None

    @property
    def layout(self) -> ColumnLayout:
        if not self.header_labels:
            return DEFAULT_LAYOUT
        return ColumnLayout(header_labels=dict(self.header_labels))


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing/invalid or data violates the schema
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration.

    path=None means the default location, which may be absent (defaults are
    used). An explicitly given path must exist.
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return AppConfig()
        path = DEFAULT_CONFIG_PATH
    elif not path.exists():
        raise ConfigError(f"config file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    defaults = AppConfig()
    return AppConfig(
        encoding=data.get("encoding", defaults.encoding),
        output_directory=data.get("output_directory", defaults.output_directory),
        log_directory=data.get("log_directory", defaults.log_directory),
        document_title=data.get("document_title", defaults.document_title),
        header_labels=data.get("header_labels"),
    )
