from __future__ import annotations

from collections.abc import Iterable

from duru.models.files import FileList

_UNITS = ("KB", "MB", "GB", "TB", "PB")


def format_bytes(value: int) -> str:
    if value < 1024:
        return f"{value} B"
    size = float(value)
    unit = _UNITS[0]
    for unit in _UNITS:
        size /= 1024.0
        if size < 1024.0:
            break
    return f"{size:.1f} {unit}"


def aligned_labels(labels: Iterable[str]) -> list[str]:
    """Pad every label so the text that follows starts in one column.

    Padding is ``widest - len(label) + 1`` spaces, with the width taken over
    the whole block.
    """
    items = list(labels)
    if not items:
        return []
    width = max(len(label) for label in items)
    return [label + " " * (width - len(label) + 1) for label in items]


def _lines(labels: list[str], files: FileList) -> list[str]:
    return [label + format_bytes(f.size) for label, f in zip(aligned_labels(labels), files, strict=True)]


def name_lines(files: FileList) -> list[str]:
    return _lines([f.name for f in files], files)


def path_lines(files: FileList) -> list[str]:
    return _lines([f.full_path for f in files], files)
