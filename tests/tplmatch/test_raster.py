import numpy as np
import pytest
from PIL import Image

from tplmatch.core.raster import raster_size, to_raster
from tplmatch.models import InvalidChannelCountError, MatchSettings


def test_to_raster_keeps_color_array_without_copy(haystack):
    assert to_raster(haystack) is haystack


def test_to_raster_accepts_nested_sequences():
    raster = to_raster([[[1, 2, 3], [4, 5, 6]]])
    assert raster.shape == (1, 2, 3)


def test_to_raster_converts_pillow_rgb_to_bgr():
    image = Image.new("RGB", (3, 2), (10, 20, 30))
    raster = to_raster(image)
    assert raster.shape == (2, 3, 3)
    assert raster[0, 0].tolist() == [30, 20, 10]


def test_to_raster_converts_pillow_to_grayscale_for_single_channel():
    image = Image.new("L", (4, 4), 77)
    raster = to_raster(image, MatchSettings(channel_count=1))
    assert raster.shape == (4, 4, 1)
    assert int(raster[2, 2, 0]) == 77


def test_to_raster_rejects_pillow_with_unsupported_channel_count():
    with pytest.raises(InvalidChannelCountError):
        to_raster(Image.new("RGB", (2, 2)), MatchSettings(channel_count=4))


def test_to_raster_rejects_float_arrays():
    with pytest.raises(ValueError):
        to_raster(np.zeros((2, 2, 3), dtype=np.float32))


def test_to_raster_rejects_wrong_rank():
    with pytest.raises(ValueError):
        to_raster(np.zeros((2, 2, 3, 1), dtype=np.uint8))


def test_to_raster_rejects_negative_intensities():
    with pytest.raises(ValueError):
        to_raster(np.full((2, 2, 3), -1, dtype=np.int16))


def test_raster_size_is_width_then_height():
    assert raster_size((40, 60, 3)) == (60, 40)
