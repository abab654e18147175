from __future__ import annotations

from duru.config.schema import AppConfig
from duru.models.enums import ErrorPolicy


def default_config() -> AppConfig:
    return AppConfig(
        head_count=20,
        scan_workers=1,
        full_path=False,
        on_error=ErrorPolicy.ABORT,
    )
