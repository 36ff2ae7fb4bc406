from __future__ import annotations

import codecs
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Config loader.

Responsibilities:
- Load the YAML config (config/payroll.yml by default)
- Validate it against the bundled JSON schema (unknown keys rejected)
- Apply defaults for every missing key
- Apply the PAYROLL_DATA_DIR environment override
"""

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ConfigError",
    "FileNames",
    "PayrollConfig",
    "load_config",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/payroll.yml")

DATA_DIR_ENV = "PAYROLL_DATA_DIR"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class FileNames:
    rates: str = "Department_Rates_File.csv"
    payroll: str = "Employee_Payroll_File.csv"
    processed: str = "Processed_Payroll_File.csv"


@dataclass(frozen=True)
class PayrollConfig:
    data_directory: str = "."
    files: FileNames = field(default_factory=FileNames)
    overtime_threshold: float = 40.0
    encoding: str = "utf-8"
    error_log_directory: str = "logs"

    @property
    def rates_path(self) -> Path:
        return Path(self.data_directory) / self.files.rates

    @property
    def payroll_path(self) -> Path:
        return Path(self.data_directory) / self.files.payroll

    @property
    def processed_path(self) -> Path:
        return Path(self.data_directory) / self.files.processed


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: the schema file is missing/invalid or the data violates it
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


def _build_config(data: dict[str, Any]) -> PayrollConfig:
    defaults = PayrollConfig()
    files_raw = data.get("files", {})
    files = FileNames(
        rates=files_raw.get("rates", defaults.files.rates),
        payroll=files_raw.get("payroll", defaults.files.payroll),
        processed=files_raw.get("processed", defaults.files.processed),
    )
    encoding = data.get("encoding", defaults.encoding)
    try:
        codecs.lookup(encoding)
    except LookupError as e:
        raise ConfigError(f"unknown encoding: {encoding}") from e
    return PayrollConfig(
        data_directory=os.getenv(DATA_DIR_ENV) or data.get("data_directory", defaults.data_directory),
        files=files,
        overtime_threshold=float(data.get("overtime_threshold", defaults.overtime_threshold)),
        encoding=encoding,
        error_log_directory=data.get("error_log_directory", defaults.error_log_directory),
    )


def load_config(path: Path | None = None, *, must_exist: bool = True) -> PayrollConfig:
    """Load and validate the configuration.

    Args:
        path: YAML file (DEFAULT_CONFIG_PATH when None)
        must_exist: when False a missing file means "all defaults"

    Raises:
        ConfigError: file missing (with must_exist), invalid YAML or schema violation
    """
    path = path or DEFAULT_CONFIG_PATH
    if not path.exists():
        if must_exist:
            raise ConfigError(f"config file not found: {path}")
        return _build_config({})
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)
    return _build_config(data)
