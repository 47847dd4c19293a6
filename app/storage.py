# app/storage.py
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List

from .errors import StorageError

logger = logging.getLogger(__name__)

# This file is the only place that touches the collection files on disk.


def load_collection(path: Path) -> List[Dict[str, Any]]:
    """
    Read a JSON array of entities. A missing, unreadable or malformed file
    reads as an empty collection.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return []
    except (OSError, ValueError) as e:
        logger.warning("collection file %s is unreadable, treating as empty: %s", path, e)
        return []
    if not isinstance(data, list):
        logger.warning("collection file %s does not hold a JSON array, treating as empty", path)
        return []
    return data


def save_collection(path: Path, entities: List[Dict[str, Any]]) -> None:
    """
    Replace the whole file with ``entities``. The data goes to a temp file in
    the same directory first and is then renamed over the target.
    """
    path = Path(path)
    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(entities, f, indent=2, ensure_ascii=False)
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except OSError as e:
        logger.warning("failed to save collection %s: %s", path, e)
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise StorageError(f"failed to save {path.name}: {e}") from e
