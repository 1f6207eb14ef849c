"""Runtime resource types owned by the engine.

Each resource is created through its ``new`` factory, which returns the
instance wrapped in its own :class:`~retrores.runtime.shared.Shared` cell.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple, Union

from ..errors import UnknownVariantError
from .shared import Shared

TileCoord = Tuple[int, int]


@dataclass
class Image:
    width: int
    height: int
    data: List[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.data:
            self.data = [0] * (self.width * self.height)

    @classmethod
    def new(cls, width: int, height: int) -> "SharedImage":
        return Shared(cls(width, height))

    def pget(self, x: int, y: int) -> int:
        return self.data[y * self.width + x]

    def pset(self, x: int, y: int, color: int) -> None:
        self.data[y * self.width + x] = color


SharedImage = Shared[Image]

# A tilemap draws its tiles either from the engine's image pool (by index)
# or from an image it holds directly.
ImageSource = Union[int, SharedImage]


@dataclass
class Tilemap:
    width: int
    height: int
    imgsrc: ImageSource = 0
    data: List[TileCoord] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.data:
            self.data = [(0, 0)] * (self.width * self.height)

    @classmethod
    def new(cls, width: int, height: int, imgsrc: ImageSource = 0) -> "SharedTilemap":
        return Shared(cls(width, height, imgsrc))

    def pget(self, x: int, y: int) -> TileCoord:
        return self.data[y * self.width + x]

    def pset(self, x: int, y: int, tile: TileCoord) -> None:
        self.data[y * self.width + x] = tile


SharedTilemap = Shared[Tilemap]


class Noise(Enum):
    OFF = "off"
    SHORT_PERIOD = "short_period"
    LONG_PERIOD = "long_period"

    def to_index(self) -> int:
        return list(Noise).index(self)

    @classmethod
    def from_index(cls, index: int) -> "Noise":
        variants = list(cls)
        if not 0 <= index < len(variants):
            raise UnknownVariantError(f"Unknown noise index: {index}")
        return variants[index]


@dataclass
class Waveform:
    gain: float = 1.0
    noise: Noise = Noise.OFF
    table: List[int] = field(default_factory=list)

    @classmethod
    def new(cls, table_size: int = 32) -> "SharedWaveform":
        return Shared(cls(table=[0] * table_size))


SharedWaveform = Shared[Waveform]


@dataclass
class Channel:
    gain: float = 0.125
    detune: int = 0

    @classmethod
    def new(cls) -> "SharedChannel":
        return Shared(cls())


SharedChannel = Shared[Channel]


@dataclass
class Sound:
    notes: List[int] = field(default_factory=list)
    tones: List[int] = field(default_factory=list)
    volumes: List[int] = field(default_factory=list)
    effects: List[int] = field(default_factory=list)
    speed: int = 30

    @classmethod
    def new(cls) -> "SharedSound":
        return Shared(cls())


SharedSound = Shared[Sound]

SharedSeq = Shared[List[int]]


@dataclass
class Music:
    # Each sequence is independently lockable so the player can edit one
    # track while another is read.
    seqs: List[SharedSeq] = field(default_factory=list)

    @classmethod
    def new(cls) -> "SharedMusic":
        return Shared(cls())

    def set(self, *seqs: List[int]) -> None:
        self.seqs = [Shared(list(seq)) for seq in seqs]


SharedMusic = Shared[Music]
