from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any


def read_json_list_of_dicts(path: str | Path) -> list[dict[str, Any]]:
    """Read a JSON array of objects; a missing file reads as an empty list.

    Raises ``ValueError`` when the file exists but does not hold a JSON array.
    """
    try:
        with open(path, encoding="utf-8") as f:
            loaded = json.load(f)
    except FileNotFoundError:
        return []
    if not isinstance(loaded, list):
        raise ValueError(f"{path}: expected a JSON array, got {type(loaded).__name__}")
    return [x for x in loaded if isinstance(x, dict)]


def write_json_list(path: str | Path, data: list[dict[str, Any]]) -> None:
    """Replace ``path`` with ``data``; readers see the old or the new file, never half."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
