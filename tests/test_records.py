from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from retrores.errors import ColorDecodeError, TableSizeError, UnknownVariantError
from retrores.persistence.records import (
    ChannelData,
    ImageData,
    MusicData,
    SoundData,
    TilemapData,
    WaveformData,
    decode_color,
    encode_color,
)
from retrores.runtime import Channel, Image, Music, Noise, Sound, Tilemap, Waveform


def test_color_encoding() -> None:
    assert encode_color(0x1A2B3C) == "1A2B3C"
    assert encode_color(0x00000F) == "00000F"
    assert decode_color("1A2B3C") == 0x1A2B3C
    assert decode_color("1a2b3c") == 0x1A2B3C


@pytest.mark.parametrize("text", ["ZZZZZZ", "", "12345", "1234567", "0x1234", " 1A2B3"])
def test_invalid_color_raises(text: str) -> None:
    with pytest.raises(ColorDecodeError):
        decode_color(text)


def test_image_round_trip() -> None:
    image = Image.new(4, 3)
    with image.lock() as img:
        img.pset(0, 0, 7)
        img.pset(3, 1, 2)
        img.pset(2, 2, 15)
        expected = list(img.data)

    data = ImageData.from_image(image)
    restored = data.to_image()

    assert restored is not image
    with restored.lock() as img:
        assert (img.width, img.height) == (4, 3)
        assert img.data == expected


def test_blank_image_compresses_to_single_cell() -> None:
    data = ImageData.from_image(Image.new(16, 16))
    assert data.data == [[0]]
    assert (data.width, data.height) == (16, 16)


def test_empty_image_round_trip() -> None:
    data = ImageData.from_image(Image.new(0, 0))
    assert data.data == []
    with data.to_image().lock() as img:
        assert (img.width, img.height, img.data) == (0, 0, [])


def test_tilemap_round_trip_keeps_coordinate_pairs() -> None:
    tilemap = Tilemap.new(2, 2, 2)
    with tilemap.lock() as tm:
        tm.data = [(0, 1), (2, 3), (4, 5), (6, 7)]

    data = TilemapData.from_tilemap(tilemap)
    assert data.imgsrc == 2
    assert data.data == [[0, 1, 2, 3], [4, 5, 6, 7]]

    with data.to_tilemap().lock() as tm:
        assert (tm.width, tm.height, tm.imgsrc) == (2, 2, 2)
        assert tm.data == [(0, 1), (2, 3), (4, 5), (6, 7)]


def test_tilemap_repeated_tiles_round_trip() -> None:
    tilemap = Tilemap.new(3, 2)
    with tilemap.lock() as tm:
        tm.data = [(1, 2), (2, 2), (2, 2), (1, 2), (2, 2), (2, 2)]
    data = TilemapData.from_tilemap(tilemap)
    assert data.data == [[1, 2]]
    with data.to_tilemap().lock() as tm:
        assert tm.data == [(1, 2), (2, 2), (2, 2), (1, 2), (2, 2), (2, 2)]


def test_tilemap_embedded_image_saved_as_index_zero(caplog: pytest.LogCaptureFixture) -> None:
    tilemap = Tilemap.new(1, 1, Image.new(8, 8))
    with caplog.at_level(logging.WARNING):
        data = TilemapData.from_tilemap(tilemap)
    assert data.imgsrc == 0
    assert "embedded image" in caplog.text


@pytest.mark.parametrize("noise", list(Noise))
def test_noise_index_round_trip(noise: Noise) -> None:
    assert Noise.from_index(noise.to_index()) is noise


@pytest.mark.parametrize("index", [-1, 3, 99])
def test_unknown_noise_index_raises(index: int) -> None:
    with pytest.raises(UnknownVariantError):
        Noise.from_index(index)


def test_waveform_round_trip() -> None:
    waveform = Waveform.new(4)
    with waveform.lock() as wf:
        wf.gain = 0.5
        wf.noise = Noise.LONG_PERIOD
        wf.table = [1, -2, 3, -4]

    data = WaveformData.from_waveform(waveform)
    assert data.noise == 2

    with data.to_waveform().lock() as wf:
        assert wf.gain == 0.5
        assert wf.noise is Noise.LONG_PERIOD
        assert wf.table == [1, -2, 3, -4]


def test_waveform_with_unknown_noise_fails_to_build() -> None:
    data = WaveformData(gain=1.0, noise=3, table=[0, 0])
    with pytest.raises(UnknownVariantError):
        data.to_waveform()


def test_waveform_table_size_is_checked() -> None:
    data = WaveformData(gain=1.0, noise=0, table=[0, 0, 0])
    with pytest.raises(TableSizeError):
        data.to_waveform(4)
    with data.to_waveform(3).lock() as wf:
        assert len(wf.table) == 3


@pytest.mark.parametrize(
    "model, fields",
    [
        (ImageData, {"width": 1, "height": 1, "data": [[-5]]}),
        (ImageData, {"width": 1, "height": 1, "data": [[256]]}),
        (TilemapData, {"width": 1, "height": 1, "data": [[0, 0x10000]]}),
        (MusicData, {"seqs": [[-1]]}),
        (SoundData, {"notes": [200], "speed": 1}),
    ],
)
def test_out_of_range_values_are_rejected(model, fields) -> None:
    with pytest.raises(ValidationError):
        model(**fields)


def test_channel_round_trip() -> None:
    channel = Channel.new()
    with channel.lock() as ch:
        ch.gain = 0.25
        ch.detune = -3
    with ChannelData.from_channel(channel).to_channel().lock() as ch:
        assert (ch.gain, ch.detune) == (0.25, -3)


def test_sound_copies_sequences_without_length_checks() -> None:
    sound = Sound.new()
    with sound.lock() as snd:
        snd.notes = [33, -1, 40]
        snd.tones = [0]
        snd.volumes = [7, 7]
        snd.effects = []
        snd.speed = 12

    data = SoundData.from_sound(sound)
    with sound.lock() as snd:
        snd.notes.append(50)
    assert data.notes == [33, -1, 40]

    with data.to_sound().lock() as snd:
        assert snd.notes == [33, -1, 40]
        assert snd.tones == [0]
        assert snd.volumes == [7, 7]
        assert snd.effects == []
        assert snd.speed == 12


def test_music_sequences_are_independently_owned() -> None:
    music = Music.new()
    with music.lock() as mus:
        mus.set([0, 1], [2], [])

    data = MusicData.from_music(music)
    assert data.seqs == [[0, 1], [2], []]

    restored = data.to_music()
    with restored.lock() as mus:
        assert len(mus.seqs) == 3
        with mus.seqs[0].lock() as seq:
            seq.append(5)
        with mus.seqs[1].lock() as seq:
            assert seq == [2]
        with mus.seqs[0].lock() as seq:
            assert seq == [0, 1, 5]
    assert data.seqs[0] == [0, 1]
