from __future__ import annotations

import io
import logging
import zipfile
from pathlib import Path
from typing import List, Optional

from ..errors import ResourceFileError
from ..runtime.engine import Runtime
from ..settings import RESOURCE_FORMAT_VERSION
from ..utils.fs import atomic_write_bytes
from .resource_data import ResourceData, ResourceSelection

logger = logging.getLogger(__name__)

RESOURCE_ARCHIVE_NAME = "resource.toml"


def save_resource(
    runtime: Runtime,
    path: str | Path,
    selection: Optional[ResourceSelection] = None,
    **flags: bool,
) -> Path:
    """Capture ``runtime`` and write it as a zip archive holding one TOML member.

    The file is replaced atomically; a failed write leaves any previous file intact.
    """
    path = Path(path)
    toml_text = ResourceData.from_runtime(runtime).to_toml(selection, **flags)
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr(RESOURCE_ARCHIVE_NAME, toml_text)
    atomic_write_bytes(path, buf.getvalue())
    logger.info("Saved resources to %s", path)
    return path


def read_resource(path: str | Path) -> ResourceData:
    """Read and parse the snapshot stored in a resource archive."""
    path = Path(path)
    try:
        with zipfile.ZipFile(path) as archive:
            toml_text = archive.read(RESOURCE_ARCHIVE_NAME).decode("utf-8")
    except FileNotFoundError as exc:
        raise ResourceFileError(f"Resource file not found: {path}") from exc
    except (zipfile.BadZipFile, KeyError, UnicodeDecodeError, OSError) as exc:
        raise ResourceFileError(f"Unable to read resource file {path}: {exc}") from exc

    data = ResourceData.from_toml(toml_text)
    if data.format_version > RESOURCE_FORMAT_VERSION:
        logger.warning(
            "Resource file %s has format version %d, newer than supported %d",
            path,
            data.format_version,
            RESOURCE_FORMAT_VERSION,
        )
    return data


def load_resource(
    runtime: Runtime,
    path: str | Path,
    selection: Optional[ResourceSelection] = None,
    **flags: bool,
) -> List[str]:
    """Apply a resource archive to ``runtime``. Returns the replaced categories."""
    data = read_resource(path)
    applied = data.to_runtime(runtime, selection, **flags)
    logger.info("Loaded resources from %s", path)
    return applied


__all__ = [
    "RESOURCE_ARCHIVE_NAME",
    "load_resource",
    "read_resource",
    "save_resource",
]
