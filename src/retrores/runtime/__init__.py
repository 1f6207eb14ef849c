from .engine import Runtime
from .resources import (
    Channel,
    Image,
    ImageSource,
    Music,
    Noise,
    Sound,
    Tilemap,
    TileCoord,
    Waveform,
)
from .shared import Shared, SharedList

__all__ = [
    "Runtime",
    "Channel",
    "Image",
    "ImageSource",
    "Music",
    "Noise",
    "Sound",
    "Tilemap",
    "TileCoord",
    "Waveform",
    "Shared",
    "SharedList",
]
