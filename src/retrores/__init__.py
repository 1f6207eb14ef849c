"""
retrores: resource persistence for a small 2D creation engine.

The engine keeps its palette, images, tilemaps, channels, sounds, musics and
waveforms in lock-protected pools (:mod:`retrores.runtime`). This package
turns those pools into a versioned TOML snapshot and back
(:mod:`retrores.persistence`).
"""
from importlib.metadata import PackageNotFoundError, version

from .errors import (
    ColorDecodeError,
    GridDecodeError,
    ResourceDecodeError,
    ResourceError,
    ResourceFileError,
    ResourceParseError,
    TableSizeError,
    UnknownVariantError,
)
from .persistence import (
    ResourceData,
    ResourceSelection,
    apply,
    capture,
    load_resource,
    parse,
    render,
    save_resource,
)
from .runtime import Runtime
from .settings import RESOURCE_FORMAT_VERSION, EngineSettings

try:
    __version__ = version("retrores")
except PackageNotFoundError:  # pragma: no cover - during tests without packaging
    __version__ = "0.0.0"

__all__ = [
    "__version__",
    "ColorDecodeError",
    "GridDecodeError",
    "ResourceDecodeError",
    "ResourceError",
    "ResourceFileError",
    "ResourceParseError",
    "TableSizeError",
    "UnknownVariantError",
    "ResourceData",
    "ResourceSelection",
    "apply",
    "capture",
    "load_resource",
    "parse",
    "render",
    "save_resource",
    "Runtime",
    "RESOURCE_FORMAT_VERSION",
    "EngineSettings",
]
