from __future__ import annotations

import logging
from typing import Optional

from ..settings import EngineSettings
from .resources import (
    Channel,
    Image,
    Music,
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
from .shared import SharedList

logger = logging.getLogger(__name__)


class Runtime:
    """The engine's resource pools.

    Every pool is a :class:`SharedList`; every element except palette
    colors is itself lock-protected.
    """

    def __init__(self, settings: Optional[EngineSettings] = None) -> None:
        self.settings = settings or EngineSettings()
        s = self.settings
        self.colors: SharedList[int] = SharedList(s.colors)
        self.images: SharedList[SharedImage] = SharedList(
            Image.new(s.image_size, s.image_size) for _ in range(s.num_images)
        )
        self.tilemaps: SharedList[SharedTilemap] = SharedList(
            Tilemap.new(s.tilemap_size, s.tilemap_size, 0) for _ in range(s.num_tilemaps)
        )
        self.channels: SharedList[SharedChannel] = SharedList(self._new_channel() for _ in range(s.num_channels))
        self.sounds: SharedList[SharedSound] = SharedList(Sound.new() for _ in range(s.num_sounds))
        self.musics: SharedList[SharedMusic] = SharedList(Music.new() for _ in range(s.num_musics))
        self.waveforms: SharedList[SharedWaveform] = SharedList(
            Waveform.new(s.waveform_size) for _ in range(s.num_waveforms)
        )
        logger.debug(
            "Runtime created: %d images, %d tilemaps, %d sounds, %d musics",
            s.num_images,
            s.num_tilemaps,
            s.num_sounds,
            s.num_musics,
        )

    def _new_channel(self) -> SharedChannel:
        channel = Channel.new()
        with channel.lock() as ch:
            ch.gain = self.settings.channel_gain
        return channel
