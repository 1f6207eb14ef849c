import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from retrores.runtime import Runtime  # noqa: E402
from retrores.settings import EngineSettings  # noqa: E402


@pytest.fixture
def small_settings() -> EngineSettings:
    return EngineSettings(
        num_images=2,
        image_size=4,
        num_tilemaps=2,
        tilemap_size=3,
        num_channels=2,
        num_sounds=3,
        num_musics=2,
        num_waveforms=2,
        waveform_size=8,
    )


@pytest.fixture
def runtime(small_settings: EngineSettings) -> Runtime:
    return Runtime(small_settings)
