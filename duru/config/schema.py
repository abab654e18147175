from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from duru.models.enums import ErrorPolicy

# (json_key, attr_name, minimum); values below the minimum are raised to it.
_INT_FIELDS: tuple[tuple[str, str, int], ...] = (
    ("headCount", "head_count", 0),
    ("scanWorkers", "scan_workers", 1),
)


def _invalid(json_key: str, value: Any, expected: str) -> ValueError:
    return ValueError(f"Invalid value for '{json_key}': expected {expected}, got {value!r}")


def _get_int(data: dict[str, Any], json_key: str, default: int, minimum: int) -> int:
    value = data.get(json_key, default)
    # bool is an int subclass, but `true` is not a count.
    if isinstance(value, bool) or not isinstance(value, int):
        raise _invalid(json_key, value, "an integer")
    return max(minimum, value)


def _get_bool(data: dict[str, Any], json_key: str, default: bool) -> bool:
    value = data.get(json_key, default)
    if not isinstance(value, bool):
        raise _invalid(json_key, value, "true or false")
    return value


def _get_policy(data: dict[str, Any], json_key: str, default: ErrorPolicy) -> ErrorPolicy:
    if json_key not in data:
        return default
    value = data[json_key]
    choices = ", ".join(repr(p.value) for p in ErrorPolicy)
    if not isinstance(value, str):
        raise _invalid(json_key, value, f"one of {choices}")
    try:
        return ErrorPolicy(value.lower())
    except ValueError:
        raise _invalid(json_key, value, f"one of {choices}") from None


@dataclass(slots=True)
class AppConfig:
    head_count: int = 20
    scan_workers: int = 1
    full_path: bool = False
    on_error: ErrorPolicy = ErrorPolicy.ABORT

    def to_dict(self) -> dict[str, Any]:
        return {
            "headCount": self.head_count,
            "scanWorkers": self.scan_workers,
            "fullPath": self.full_path,
            "onError": self.on_error.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], defaults: AppConfig) -> AppConfig:
        """Build a config from a parsed JSON object.

        Missing keys take their value from *defaults*.  A value of the wrong
        type raises ``ValueError`` naming the offending key.
        """
        int_kwargs: dict[str, int] = {}
        for json_key, attr, minimum in _INT_FIELDS:
            int_kwargs[attr] = _get_int(data, json_key, getattr(defaults, attr), minimum)

        return cls(
            full_path=_get_bool(data, "fullPath", defaults.full_path),
            on_error=_get_policy(data, "onError", defaults.on_error),
            **int_kwargs,
        )
