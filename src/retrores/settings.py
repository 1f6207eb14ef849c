from __future__ import annotations

import dataclasses
import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "retrores"

# Bump when the snapshot layout changes.
RESOURCE_FORMAT_VERSION = 4

DEFAULT_COLORS: List[int] = [
    0x000000,
    0x2B335F,
    0x7E2072,
    0x19959C,
    0x8B4852,
    0x395C98,
    0xA9C1FF,
    0xEEEEEE,
    0xD4186C,
    0xD38441,
    0xE9C35B,
    0x70C6A9,
    0x7696DE,
    0xA3A3A3,
    0xFF9798,
    0xEDC7B0,
]

_SIZE_FIELDS = (
    "num_images",
    "image_size",
    "num_tilemaps",
    "tilemap_size",
    "num_channels",
    "num_sounds",
    "num_musics",
    "num_waveforms",
    "waveform_size",
)


def _parse_colors(value: Any) -> List[int]:
    """Accept a list of ints or a comma separated string of hex values."""
    if isinstance(value, str):
        return [int(part.strip(), 16) for part in value.split(",") if part.strip()]
    return [int(v, 16) if isinstance(v, str) else int(v) for v in value]


@dataclass
class EngineSettings:
    """Sizes of the runtime resource pools.

    Values come from, in order of precedence (lowest to highest):
    - the defaults below
    - a TOML file (env RETRORES_SETTINGS_FILE, else settings.toml in the user config dir)
    - environment variables (prefix: RETRORES_)

    The TOML file may hold keys at the top level or under an [engine] table.
    """

    colors: List[int] = field(default_factory=lambda: list(DEFAULT_COLORS))
    num_images: int = 3
    image_size: int = 256
    num_tilemaps: int = 8
    tilemap_size: int = 256
    num_channels: int = 4
    num_sounds: int = 64
    num_musics: int = 8
    num_waveforms: int = 4
    waveform_size: int = 32
    channel_gain: float = 0.125

    def validate(self) -> None:
        """Validate and normalize settings to safe values."""
        defaults = EngineSettings()
        for name in _SIZE_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, int) or value < 0:
                logger.warning("Invalid %s=%r; resetting to %s", name, value, getattr(defaults, name))
                setattr(self, name, getattr(defaults, name))
        if not self.colors:
            logger.warning("Empty palette; resetting to the default palette")
            self.colors = list(DEFAULT_COLORS)
        self.colors = [int(c) & 0xFFFFFF for c in self.colors]
        try:
            gain = float(self.channel_gain)
        except (TypeError, ValueError):
            logger.warning("Invalid channel_gain=%r; resetting to %s", self.channel_gain, defaults.channel_gain)
            gain = defaults.channel_gain
        self.channel_gain = max(0.0, min(1.0, gain))

    def as_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngineSettings":
        allowed = {f.name for f in dataclasses.fields(cls)}
        filtered = {k: v for k, v in data.items() if k in allowed}
        if "colors" in filtered:
            try:
                filtered["colors"] = _parse_colors(filtered["colors"])
            except (TypeError, ValueError):
                logger.warning("Invalid colors=%r; using the default palette", filtered["colors"])
                del filtered["colors"]
        obj = cls(**filtered)
        obj.validate()
        return obj

    @classmethod
    def from_env(cls, env: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        env = env if env is not None else os.environ
        mapping = {f"RETRORES_{name.upper()}": (name, int) for name in _SIZE_FIELDS}
        mapping["RETRORES_CHANNEL_GAIN"] = ("channel_gain", float)
        mapping["RETRORES_COLORS"] = ("colors", _parse_colors)
        out: Dict[str, Any] = {}
        for env_key, (field_name, caster) in mapping.items():
            if env.get(env_key, "") != "":
                try:
                    out[field_name] = caster(env[env_key])
                except ValueError as exc:
                    logger.error("Invalid env for %s=%r: %s", env_key, env[env_key], exc)
        return out

    @classmethod
    def from_toml_file(cls, path: Path) -> Dict[str, Any]:
        if not path.exists():
            logger.debug("Settings file not found: %s", path)
            return {}
        try:
            with path.open("rb") as f:
                doc = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            logger.error("Failed to read settings TOML %s: %s", path, exc)
            return {}
        flat: Dict[str, Any] = {k: v for k, v in doc.items() if not isinstance(v, dict)}
        if isinstance(doc.get("engine"), dict):
            flat.update(doc["engine"])
        return flat

    @classmethod
    def discover_config_path(cls) -> Path:
        env_path = os.environ.get("RETRORES_SETTINGS_FILE")
        if env_path:
            return Path(env_path).expanduser().resolve()
        return Path(user_config_dir(appname=APP_NAME)) / "settings.toml"

    @classmethod
    def from_sources(
        cls,
        *,
        env: Optional[Dict[str, str]] = None,
        file_path: Optional[Path | str] = None,
    ) -> "EngineSettings":
        # Order of precedence (lowest to highest): defaults < file < env
        data: Dict[str, Any] = {}
        if file_path is not None:
            chosen_path = Path(file_path).expanduser().resolve()
        else:
            chosen_path = cls.discover_config_path()
        data.update(cls.from_toml_file(chosen_path))
        data.update(cls.from_env(env))
        return cls.from_dict(data)


__all__ = [
    "APP_NAME",
    "DEFAULT_COLORS",
    "EngineSettings",
    "RESOURCE_FORMAT_VERSION",
]
