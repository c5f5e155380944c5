"""Settings for the maintenance log: defaults, optional YAML file, environment."""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

# Path to the default data file (relative to project root)
PROJECT_DIR = Path(__file__).parent
DEFAULT_DATA_FILE = PROJECT_DIR / "data" / "entries.json"

ENV_VARS = {
    "data_file": "MAINT_DATA_FILE",
    "report_title": "MAINT_REPORT_TITLE",
    "report_filename": "MAINT_REPORT_FILENAME",
    "logo_path": "MAINT_LOGO",
    "log_level": "MAINT_LOG_LEVEL",
    "port": "PORT",
}

CAMEL_KEYS = {
    "dataFile": "data_file",
    "reportTitle": "report_title",
    "reportFilename": "report_filename",
    "logoPath": "logo_path",
    "logLevel": "log_level",
}


@dataclass
class Settings:
    data_file: Path = DEFAULT_DATA_FILE
    report_title: str = "Maintenance / Mods Tracker"
    report_filename: str = "maintenance.pdf"
    logo_path: Optional[Path] = None
    host: str = "0.0.0.0"
    # 5001 avoids the macOS AirPlay Receiver on 5000
    port: int = 5001
    log_level: str = "INFO"


def _coerce(name: str, value: Any) -> Any:
    if name in ("data_file", "logo_path"):
        return Path(value) if value else None
    if name == "port":
        return int(value)
    return str(value)


def load_config_file(filename: Union[str, Path]) -> Dict[str, Any]:
    """Read a YAML settings file. Keys may be snake_case or camelCase."""
    with open(filename, "r") as fp:
        data = yaml.safe_load(fp) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {filename} must contain a mapping")
    return {CAMEL_KEYS.get(key, key): value for key, value in data.items()}


def load_settings(
    config_file: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """
    Resolve settings from defaults, then the YAML file, then the environment.

    The YAML file comes from `config_file` or the MAINT_CONFIG variable.
    Unknown keys are ignored.
    """
    environ = os.environ if environ is None else environ
    known = {f.name for f in fields(Settings)}
    values: Dict[str, Any] = {}

    config_file = config_file or environ.get("MAINT_CONFIG")
    if config_file:
        for key, value in load_config_file(config_file).items():
            if key in known and value is not None:
                values[key] = _coerce(key, value)

    for key, var in ENV_VARS.items():
        if environ.get(var):
            values[key] = _coerce(key, environ[var])

    if values.get("data_file") is None:
        values.pop("data_file", None)
    return Settings(**values)
