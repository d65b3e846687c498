import numpy as np
import pytest
from PIL import Image

import tplmatch
from tplmatch import InvalidChannelCountError, InvalidImageError, MatchSettings, match

from conftest import solid


def test_match_is_deterministic(haystack, rng):
    needle = rng.integers(0, 256, size=(6, 9, 3), dtype=np.uint8)
    results = {match(haystack, needle) for _ in range(3)}
    assert len(results) == 1


def test_match_finds_verbatim_copy(haystack):
    needle = haystack[9:17, 17:29].copy()
    result = match(haystack, needle)
    assert result.confidence == 1.0
    assert result.location == (17, 9)


def test_match_confidence_within_bounds(haystack, rng):
    for _ in range(5):
        needle = rng.integers(0, 256, size=(5, 7, 3), dtype=np.uint8)
        result = match(haystack, needle)
        assert result.found
        assert 0.0 <= result.confidence <= 1.0


def test_match_low_similarity_is_still_a_result():
    haystack = solid(20, 20, (0, 0, 0))
    needle = solid(4, 4, (255, 255, 255))
    result = match(haystack, needle)
    assert result.found
    assert result.location == (0, 0)
    assert result.confidence == 0.0


@pytest.mark.parametrize(("needle_width", "needle_height"), [(30, 5), (5, 30), (40, 40)])
def test_match_oversized_needle_is_not_found(needle_width, needle_height):
    result = match(solid(20, 20), solid(needle_width, needle_height))
    assert not result.found
    assert result.confidence == 0.0
    assert result.location is None


def test_match_needle_equal_to_haystack_is_not_found():
    image = solid(12, 8)
    assert not match(image, image).found
    assert match(image, image, settings=MatchSettings(scan_far_edge=True)).location == (0, 0)


@pytest.mark.parametrize(
    ("haystack_shape", "needle_shape", "role"),
    [((0, 10, 3), (2, 2, 3), "haystack"), ((10, 10, 3), (2, 0, 3), "needle")],
)
def test_match_rejects_zero_area(haystack_shape, needle_shape, role):
    with pytest.raises(InvalidImageError) as exc_info:
        match(np.zeros(haystack_shape, dtype=np.uint8), np.zeros(needle_shape, dtype=np.uint8))
    assert exc_info.value.role == role


@pytest.mark.parametrize("needle", [np.zeros((0, 0)), np.zeros((0, 5)), []])
def test_match_rejects_zero_area_before_layout_checks(needle):
    with pytest.raises(InvalidImageError) as exc_info:
        match(np.zeros((10, 10, 3), dtype=np.uint8), needle)
    assert exc_info.value.role == "needle"


def test_match_rejects_zero_area_pillow_image():
    with pytest.raises(InvalidImageError) as exc_info:
        match(Image.new("RGB", (0, 4)), np.zeros((2, 2, 3), dtype=np.uint8))
    assert exc_info.value.role == "haystack"


def test_match_rejects_channel_mismatch():
    with pytest.raises(InvalidChannelCountError):
        match(np.zeros((10, 10, 4), dtype=np.uint8), np.zeros((2, 2, 4), dtype=np.uint8))


def test_match_ignores_anomaly_outside_window():
    haystack = solid(100, 100, (0, 0, 0))
    needle = (np.arange(300) % 200 + 1).astype(np.uint8).reshape(10, 10, 3)
    haystack[40:50, 40:50] = needle
    haystack[5, 90] = (255, 255, 255)

    result = match(haystack, needle)
    assert result.confidence == 1.0
    assert result.location == (40, 40)


def test_match_solid_haystack_with_anomaly_reports_exact_window():
    haystack = solid(100, 100, (30, 60, 90))
    haystack[5, 90] = (255, 255, 255)
    needle = solid(10, 10, (30, 60, 90))

    result = match(haystack, needle)
    assert result.confidence == 1.0
    window = haystack[result.y : result.y + 10, result.x : result.x + 10]
    assert np.array_equal(window, needle)


def test_match_uniform_gray_reports_first_position():
    result = match(solid(50, 50), solid(5, 5))
    assert result.confidence == 1.0
    assert result.location == (0, 0)


def test_match_accepts_pillow_images(haystack):
    needle = haystack[3:8, 30:40]
    # Pillow images are RGB; the engine compares them in BGR like OpenCV.
    result = match(Image.fromarray(haystack[..., ::-1].copy()), Image.fromarray(needle[..., ::-1].copy()))
    assert result.confidence == 1.0
    assert result.location == (30, 3)


def test_match_single_channel_settings(rng):
    haystack = rng.integers(0, 256, size=(30, 30), dtype=np.uint8)
    needle = haystack[11:15, 4:9]
    result = match(haystack, needle, settings=MatchSettings(channel_count=1))
    assert result.location == (4, 11)
    assert result.confidence == 1.0


def test_match_sixteen_bit_intensities(rng):
    settings = MatchSettings(max_intensity=65535)
    haystack = rng.integers(0, 65536, size=(20, 25, 3), dtype=np.uint16)
    needle = haystack[6:10, 2:7].copy()
    value = int(needle[0, 0, 0])
    needle[0, 0, 0] = value + 10 if value < 65525 else value - 10

    result = match(haystack, needle, settings=settings)
    assert result.location == (2, 6)
    assert 0.99 < result.confidence < 1.0


def test_match_rejects_out_of_range_intensities():
    haystack = np.full((10, 10, 3), 300, dtype=np.uint16)
    with pytest.raises(ValueError):
        match(haystack, np.zeros((2, 2, 3), dtype=np.uint16))


def test_match_is_exported_from_package():
    assert tplmatch.match is match
