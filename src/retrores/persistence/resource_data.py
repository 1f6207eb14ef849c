"""Snapshot of every resource category, with selective import/export.

A :class:`ResourceData` is a plain value. :meth:`ResourceData.from_runtime`
copies the engine's pools into it, :meth:`ResourceData.to_runtime` replaces
the selected pools with fresh resources built from it, and the TOML helpers
move it to and from text.
"""
from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, List, Optional

import tomli_w
from pydantic import BaseModel, Field, StrictInt, StrictStr, ValidationError

from ..errors import ResourceParseError
from ..runtime.engine import Runtime
from ..runtime.shared import SharedList
from ..settings import RESOURCE_FORMAT_VERSION
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

logger = logging.getLogger(__name__)

CATEGORIES = ("colors", "images", "tilemaps", "channels", "sounds", "musics", "waveforms")


@dataclass(frozen=True)
class ResourceSelection:
    """Which categories an import or export touches.

    Images, tilemaps, sounds and musics are included unless excluded;
    colors, channels and waveforms are excluded unless included.
    """

    exclude_images: bool = False
    exclude_tilemaps: bool = False
    exclude_sounds: bool = False
    exclude_musics: bool = False
    include_colors: bool = False
    include_channels: bool = False
    include_waveforms: bool = False

    @classmethod
    def only(cls, *categories: str) -> "ResourceSelection":
        """Select exactly the named categories."""
        unknown = set(categories) - set(CATEGORIES)
        if unknown:
            raise ValueError(f"Unknown resource categories: {sorted(unknown)}")
        return cls(
            exclude_images="images" not in categories,
            exclude_tilemaps="tilemaps" not in categories,
            exclude_sounds="sounds" not in categories,
            exclude_musics="musics" not in categories,
            include_colors="colors" in categories,
            include_channels="channels" in categories,
            include_waveforms="waveforms" in categories,
        )

    def includes(self, category: str) -> bool:
        if category not in CATEGORIES:
            raise ValueError(f"Unknown resource category: {category}")
        if category in ("colors", "channels", "waveforms"):
            return getattr(self, f"include_{category}")
        return not getattr(self, f"exclude_{category}")


def _selection(selection: Optional[ResourceSelection], flags: Dict[str, bool]) -> ResourceSelection:
    if selection is not None and flags:
        raise TypeError("Pass either a ResourceSelection or selection flags, not both")
    if selection is not None:
        return selection
    allowed = {f.name for f in fields(ResourceSelection)}
    unknown = set(flags) - allowed
    if unknown:
        raise TypeError(f"Unknown selection flags: {sorted(unknown)}")
    return ResourceSelection(**flags)


class ResourceData(BaseModel):
    format_version: StrictInt
    colors: List[StrictStr] = Field(default_factory=list)
    images: List[ImageData] = Field(default_factory=list)
    tilemaps: List[TilemapData] = Field(default_factory=list)
    channels: List[ChannelData] = Field(default_factory=list)
    sounds: List[SoundData] = Field(default_factory=list)
    musics: List[MusicData] = Field(default_factory=list)
    waveforms: List[WaveformData] = Field(default_factory=list)

    @classmethod
    def from_toml(cls, toml_text: str) -> "ResourceData":
        try:
            doc = tomllib.loads(toml_text)
        except tomllib.TOMLDecodeError as exc:
            raise ResourceParseError(f"Invalid resource TOML: {exc}") from exc
        try:
            return cls.model_validate(doc)
        except ValidationError as exc:
            raise ResourceParseError(f"Invalid resource data: {exc}") from exc

    @classmethod
    def from_runtime(cls, runtime: Runtime) -> "ResourceData":
        data = cls(
            format_version=RESOURCE_FORMAT_VERSION,
            colors=[encode_color(c) for c in runtime.colors.snapshot()],
        )
        with runtime.images.lock() as images:
            data.images = [ImageData.from_image(image) for image in images]
        with runtime.tilemaps.lock() as tilemaps:
            data.tilemaps = [TilemapData.from_tilemap(tilemap) for tilemap in tilemaps]
        with runtime.channels.lock() as channels:
            data.channels = [ChannelData.from_channel(channel) for channel in channels]
        with runtime.sounds.lock() as sounds:
            data.sounds = [SoundData.from_sound(sound) for sound in sounds]
        with runtime.musics.lock() as musics:
            data.musics = [MusicData.from_music(music) for music in musics]
        with runtime.waveforms.lock() as waveforms:
            data.waveforms = [WaveformData.from_waveform(waveform) for waveform in waveforms]
        logger.debug(
            "Captured resources: %d images, %d tilemaps, %d sounds, %d musics",
            len(data.images),
            len(data.tilemaps),
            len(data.sounds),
            len(data.musics),
        )
        return data

    def to_runtime(
        self,
        runtime: Runtime,
        selection: Optional[ResourceSelection] = None,
        **flags: bool,
    ) -> List[str]:
        """Replace the selected, non-empty pools of ``runtime``.

        Every selected category is decoded before any pool is touched, so a
        decode error leaves the runtime as it was. Returns the names of the
        replaced categories.
        """
        selection = _selection(selection, flags)
        builders: Dict[str, Callable[[], List[Any]]] = {
            "colors": lambda: [decode_color(c) for c in self.colors],
            "images": lambda: [d.to_image() for d in self.images],
            "tilemaps": lambda: [d.to_tilemap() for d in self.tilemaps],
            "channels": lambda: [d.to_channel() for d in self.channels],
            "sounds": lambda: [d.to_sound() for d in self.sounds],
            "musics": lambda: [d.to_music() for d in self.musics],
            "waveforms": lambda: [d.to_waveform(runtime.settings.waveform_size) for d in self.waveforms],
        }
        pending: Dict[str, List[Any]] = {}
        for category in CATEGORIES:
            if selection.includes(category) and getattr(self, category):
                pending[category] = builders[category]()

        for category, items in pending.items():
            pool: SharedList[Any] = getattr(runtime, category)
            pool.replace(items)
        logger.info("Applied resource categories: %s", ", ".join(pending) or "none")
        return list(pending)

    def to_toml(self, selection: Optional[ResourceSelection] = None, **flags: bool) -> str:
        selection = _selection(selection, flags)
        data = self.model_copy(deep=True)
        for category in CATEGORIES:
            if not selection.includes(category):
                getattr(data, category).clear()
        return tomli_w.dumps(data.model_dump())


def parse(text: str) -> ResourceData:
    return ResourceData.from_toml(text)


def capture(runtime: Runtime) -> ResourceData:
    return ResourceData.from_runtime(runtime)


def apply(
    runtime: Runtime,
    data: ResourceData,
    selection: Optional[ResourceSelection] = None,
    **flags: bool,
) -> List[str]:
    return data.to_runtime(runtime, selection, **flags)


def render(data: ResourceData, selection: Optional[ResourceSelection] = None, **flags: bool) -> str:
    return data.to_toml(selection, **flags)


__all__ = [
    "CATEGORIES",
    "ResourceData",
    "ResourceSelection",
    "apply",
    "capture",
    "parse",
    "render",
]
