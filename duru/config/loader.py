from __future__ import annotations

import json

from result import Err, Ok, Result

from duru.config.defaults import default_config
from duru.config.schema import AppConfig
from duru.services.fs import DEFAULT_FS, FileSystem

CONFIG_PATH = "~/.config/duru/config.json"


def load_config(path: str | None = None, fs: FileSystem = DEFAULT_FS) -> Result[AppConfig, str]:
    """Read the JSON config at *path* (or the per-user default location).

    A missing file yields the defaults.  Unreadable files, malformed JSON and
    values of the wrong type come back as an ``Err`` message.
    """
    resolved = fs.expanduser(path or CONFIG_PATH)
    if not fs.exists(resolved):
        return Ok(default_config())

    try:
        payload = json.loads(fs.read_text(resolved))
    except (OSError, ValueError) as exc:
        return Err(f"Failed reading config at {resolved}: {exc}.")
    if not isinstance(payload, dict):
        return Err(f"Config at {resolved} must be a JSON object.")

    try:
        return Ok(AppConfig.from_dict(payload, default_config()))
    except ValueError as exc:
        return Err(f"Invalid config at {resolved}: {exc}.")


def sample_config_json() -> str:
    return json.dumps(default_config().to_dict(), indent=2)
