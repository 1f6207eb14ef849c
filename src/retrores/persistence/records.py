"""Serializable records for each resource category.

Every record converts one lock-protected runtime resource into plain data
(``from_*``) and builds a fresh runtime resource from that data (``to_*``).
Records hold copies only; they never keep a reference to runtime state.
"""
from __future__ import annotations

import logging
import re
from typing import Any, List, Optional

from pydantic import BaseModel, Field, StrictFloat, StrictInt, conint, field_validator

from ..errors import ColorDecodeError, TableSizeError
from ..runtime.resources import (
    Channel,
    Image,
    Music,
    Noise,
    SharedChannel,
    SharedImage,
    SharedMusic,
    SharedSound,
    SharedTilemap,
    SharedWaveform,
    Sound,
    Tilemap,
    Waveform,
)
from ..runtime.shared import Shared
from .grid import compress_rows, expand_rows

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"[0-9A-Fa-f]{6}")

Int8 = conint(strict=True, ge=-0x80, le=0x7F)
UInt8 = conint(strict=True, ge=0, le=0xFF)
UInt16 = conint(strict=True, ge=0, le=0xFFFF)
UInt32 = conint(strict=True, ge=0, le=0xFFFFFFFF)


def encode_color(rgb: int) -> str:
    return f"{rgb & 0xFFFFFF:06X}"


def decode_color(text: str) -> int:
    if not isinstance(text, str) or not _HEX_COLOR.fullmatch(text):
        raise ColorDecodeError(f"Invalid color value: {text!r}")
    return int(text, 16)


class ImageData(BaseModel):
    width: StrictInt = Field(..., ge=0)
    height: StrictInt = Field(..., ge=0)
    data: List[List[UInt8]] = Field(default_factory=list, description="Compressed pixel rows")

    @classmethod
    def from_image(cls, image: SharedImage) -> "ImageData":
        with image.lock() as img:
            width, height = img.width, img.height
            rows = [img.data[y * width : (y + 1) * width] for y in range(height)] if width else []
        return cls(width=width, height=height, data=compress_rows(rows))

    def to_image(self) -> SharedImage:
        rows = expand_rows(self.data, self.height, self.width)
        image = Image.new(self.width, self.height)
        with image.lock() as img:
            img.data = [color for row in rows for color in row]
        return image


class TilemapData(BaseModel):
    width: StrictInt = Field(..., ge=0)
    height: StrictInt = Field(..., ge=0)
    imgsrc: UInt32 = 0
    data: List[List[UInt16]] = Field(default_factory=list, description="Compressed rows of interleaved tile x/y")

    @classmethod
    def from_tilemap(cls, tilemap: SharedTilemap) -> "TilemapData":
        with tilemap.lock() as tm:
            width, height = tm.width, tm.height
            if isinstance(tm.imgsrc, int):
                imgsrc = tm.imgsrc
            else:
                # TODO: confirm with product whether embedded images should be persisted
                logger.warning("Tilemap uses an embedded image; it is saved as image index 0")
                imgsrc = 0
            flat = [v for tile in tm.data for v in tile]
        row_len = width * 2
        rows = [flat[y * row_len : (y + 1) * row_len] for y in range(height)] if width else []
        return cls(width=width, height=height, imgsrc=imgsrc, data=compress_rows(rows))

    def to_tilemap(self) -> SharedTilemap:
        rows = expand_rows(self.data, self.height, self.width * 2)
        flat = [v for row in rows for v in row]
        tilemap = Tilemap.new(self.width, self.height, self.imgsrc)
        with tilemap.lock() as tm:
            tm.data = [(flat[i], flat[i + 1]) for i in range(0, len(flat), 2)]
        return tilemap


def _int_gain_as_float(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    return value


class WaveformData(BaseModel):
    gain: StrictFloat
    noise: StrictInt
    table: List[StrictInt] = Field(default_factory=list)

    gain_as_float = field_validator("gain", mode="before")(_int_gain_as_float)

    @classmethod
    def from_waveform(cls, waveform: SharedWaveform) -> "WaveformData":
        with waveform.lock() as wf:
            return cls(gain=float(wf.gain), noise=wf.noise.to_index(), table=list(wf.table))

    def to_waveform(self, table_size: Optional[int] = None) -> SharedWaveform:
        """Build a waveform; ``table_size`` is the engine's fixed table length."""
        if table_size is not None and len(self.table) != table_size:
            raise TableSizeError(f"Waveform table has {len(self.table)} values, expected {table_size}")
        waveform = Waveform.new(len(self.table))
        with waveform.lock() as wf:
            wf.gain = self.gain
            wf.noise = Noise.from_index(self.noise)
            wf.table = list(self.table)
        return waveform


class ChannelData(BaseModel):
    gain: StrictFloat
    detune: StrictInt

    gain_as_float = field_validator("gain", mode="before")(_int_gain_as_float)

    @classmethod
    def from_channel(cls, channel: SharedChannel) -> "ChannelData":
        with channel.lock() as ch:
            return cls(gain=float(ch.gain), detune=ch.detune)

    def to_channel(self) -> SharedChannel:
        channel = Channel.new()
        with channel.lock() as ch:
            ch.gain = self.gain
            ch.detune = self.detune
        return channel


class SoundData(BaseModel):
    notes: List[Int8] = Field(default_factory=list)
    tones: List[UInt8] = Field(default_factory=list)
    volumes: List[UInt8] = Field(default_factory=list)
    effects: List[UInt8] = Field(default_factory=list)
    speed: UInt32

    @classmethod
    def from_sound(cls, sound: SharedSound) -> "SoundData":
        with sound.lock() as snd:
            return cls(
                notes=list(snd.notes),
                tones=list(snd.tones),
                volumes=list(snd.volumes),
                effects=list(snd.effects),
                speed=snd.speed,
            )

    def to_sound(self) -> SharedSound:
        sound = Sound.new()
        with sound.lock() as snd:
            snd.notes = list(self.notes)
            snd.tones = list(self.tones)
            snd.volumes = list(self.volumes)
            snd.effects = list(self.effects)
            snd.speed = self.speed
        return sound


class MusicData(BaseModel):
    seqs: List[List[UInt32]] = Field(default_factory=list)

    @classmethod
    def from_music(cls, music: SharedMusic) -> "MusicData":
        seqs: List[List[int]] = []
        with music.lock() as mus:
            for seq in mus.seqs:
                with seq.lock() as values:
                    seqs.append(list(values))
        return cls(seqs=seqs)

    def to_music(self) -> SharedMusic:
        music = Music.new()
        with music.lock() as mus:
            mus.seqs = [Shared(list(seq)) for seq in self.seqs]
        return music


__all__ = [
    "ChannelData",
    "ImageData",
    "MusicData",
    "SoundData",
    "TilemapData",
    "WaveformData",
    "decode_color",
    "encode_color",
]
