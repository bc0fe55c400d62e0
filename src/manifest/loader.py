"""Locate and parse the manifest document."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

try:
    import tomllib as toml  # type: ignore
except ImportError:  # Python < 3.11
    import tomli as toml  # type: ignore

from constants import Constants

from .errors import DocumentFormatError, ManifestIOError

logger = logging.getLogger(__name__)


def manifest_path(
    environ: Optional[Mapping[str, str]] = None,
    *,
    dir_env: str = Constants.MANIFEST_DIR_ENV,
    file_name: str = Constants.MANIFEST_FILE,
) -> Path:
    """Return ``$CARGO_MANIFEST_DIR/Cargo.toml``.

    Raises:
        ManifestIOError: the environment variable is not set.
    """
    env = os.environ if environ is None else environ
    manifest_dir = env.get(dir_env)
    if not manifest_dir:
        raise ManifestIOError(f"`{dir_env}` environment variable not found")
    return Path(manifest_dir) / file_name


def parse_document(text: str, path: Optional[str] = None) -> Dict[str, Any]:
    """Parse manifest text into a plain dict tree."""
    try:
        return toml.loads(text)
    except toml.TOMLDecodeError as e:
        raise DocumentFormatError(
            f"an error occurred while parsing the manifest file: {e}", path=path
        ) from e


def read_document(path: os.PathLike | str) -> Dict[str, Any]:
    """Read and parse the manifest at ``path``.

    Raises:
        ManifestIOError: the file is missing or unreadable.
        DocumentFormatError: the file is not UTF-8 TOML.
    """
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise ManifestIOError(
            f"an error occurred while opening or reading the manifest: {e.strerror or e}",
            path=str(path),
        ) from e

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DocumentFormatError("the manifest is not valid UTF-8", path=str(path)) from e

    logger.debug("Read manifest %s (%d bytes)", path, len(raw))
    return parse_document(text, path=str(path))
