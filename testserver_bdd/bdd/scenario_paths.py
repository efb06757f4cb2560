from __future__ import annotations

from pathlib import Path
from typing import Any

SEGMENT_DELIMITER = ";"
RECIPE_FILE_SUFFIX = ".json"
_PATH_SEPARATORS = "/\\"


def scenario_identifier(scenario: Any) -> str | None:
    if scenario is None:
        return None
    if isinstance(scenario, str):
        return scenario
    value = getattr(scenario, "id", None)
    return str(value) if value is not None else None


def _split_segments(scenario_id: str) -> list[str]:
    segments = [segment.lstrip(_PATH_SEPARATORS) for segment in scenario_id.split(SEGMENT_DELIMITER)]
    while len(segments) > 1 and not segments[-1]:
        segments.pop()
    return segments


def scenario_log_path(log_folder: str | Path, scenario_id: str) -> Path:
    """Map a scenario id such as ``feature;scenario;example`` to a recipe file path.

    The first segment names a subfolder of ``log_folder`` and the rest, trimmed
    and with blanks skipped, form the file name. A single segment is used as the
    file name directly under ``log_folder``. Leading path separators are dropped
    from every segment so the result never escapes ``log_folder``.
    """
    root = Path(log_folder)
    segments = _split_segments(scenario_id)
    if len(segments) > 1:
        remaining = [segment.strip() for segment in segments[1:] if segment.strip()]
        if remaining:
            return root / segments[0] / ("_".join(remaining) + RECIPE_FILE_SUFFIX)
    return root / (segments[0] + RECIPE_FILE_SUFFIX)


def ensure_within_folder(path: str | Path, log_folder: str | Path) -> Path:
    resolved = Path(path).resolve()
    root = Path(log_folder).resolve()
    if root in resolved.parents:
        return resolved
    raise PermissionError(f"Recipe path escapes log folder: {resolved}")
