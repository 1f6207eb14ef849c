"""Resource persistence for retrores.

This package provides:
- A lossless row codec for grid-shaped data (images, tilemaps)
- Per-category records converting runtime resources to plain data and back
- ResourceData, the versioned snapshot with selective TOML import/export
- Zip archive load/save with atomic writes
"""

from .grid import compress_rows, expand_rows
from .records import (
    ChannelData,
    ImageData,
    MusicData,
    SoundData,
    TilemapData,
    WaveformData,
    decode_color,
    encode_color,
)
from .resource_data import (
    CATEGORIES,
    ResourceData,
    ResourceSelection,
    apply,
    capture,
    parse,
    render,
)
from .resource_file import load_resource, read_resource, save_resource

__all__ = [
    "compress_rows",
    "expand_rows",
    "ChannelData",
    "ImageData",
    "MusicData",
    "SoundData",
    "TilemapData",
    "WaveformData",
    "decode_color",
    "encode_color",
    "CATEGORIES",
    "ResourceData",
    "ResourceSelection",
    "apply",
    "capture",
    "parse",
    "render",
    "load_resource",
    "read_resource",
    "save_resource",
]
