"""Environment utilities for resolving Docker secret files."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import MutableMapping, Optional

logger = logging.getLogger(__name__)

SECRET_FILE_SUFFIX = "_FILE"


def read_secret_file(key: str, file_path: str) -> Optional[str]:
    """
    Read a secret file referenced by ``key``.

    Returns the stripped file contents, or None when the file cannot be read.
    Failures are logged as warnings.
    """
    try:
        return Path(file_path).read_text(encoding="utf-8").strip()
    except FileNotFoundError as exc:
        event = "env.secret_file.missing"
        error = exc
    except UnicodeDecodeError as exc:
        event = "env.secret_file.decode_failed"
        error = exc
    except OSError as exc:
        event = "env.secret_file.load_failed"
        error = exc

    logger.warning(event, extra={"key": key, "path": file_path, "error": str(error)})
    return None


def load_secret_file_variables(
    environ: Optional[MutableMapping[str, str]] = None,
) -> None:
    """
    Expose ``KEY_FILE`` secrets as ``KEY`` variables.

    A target variable that is already set wins over its secret file, so
    ``DB_MONGO_URI`` overrides ``DB_MONGO_URI_FILE``.
    """
    env = os.environ if environ is None else environ

    for key, file_path in list(env.items()):
        if not key.endswith(SECRET_FILE_SUFFIX) or not file_path:
            continue
        target_key = key[: -len(SECRET_FILE_SUFFIX)]
        if env.get(target_key):
            continue
        value = read_secret_file(key, file_path)
        if value is not None:
            env[target_key] = value


load_secret_file_variables()
