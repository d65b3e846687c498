import dataclasses

import pytest

from tplmatch.constants import NOT_FOUND
from tplmatch.models import (
    Candidate,
    ImageLoadError,
    InvalidChannelCountError,
    InvalidImageError,
    MatchResult,
    MatchSettings,
    Point,
)


def test_invalid_image_error_exposes_role_shape_and_message():
    err = InvalidImageError("needle", (0, 4, 3))
    assert err.role == "needle"
    assert err.shape == (0, 4, 3)
    assert "Invalid needle image" in str(err)


def test_invalid_channel_count_error_exposes_counts_and_message():
    err = InvalidChannelCountError(expected=3, received=4)
    assert err.expected == 3
    assert err.received == 4
    assert "Expected 3 channel(s)" in str(err)
    assert "received 4 channel(s)" in str(err)


def test_image_load_error_exposes_path():
    err = ImageLoadError("missing.png")
    assert err.path == "missing.png"
    assert "missing.png" in str(err)


def test_match_result_not_found():
    result = MatchResult.not_found()
    assert result == MatchResult(confidence=0.0, x=NOT_FOUND, y=NOT_FOUND)
    assert not result.found
    assert result.location is None


def test_match_result_location():
    result = MatchResult(confidence=0.75, x=3, y=8)
    assert result.found
    assert result.location == Point(3, 8)


def test_match_result_is_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        MatchResult(confidence=1.0, x=0, y=0).confidence = 0.5


def test_match_settings_defaults():
    settings = MatchSettings()
    assert settings.channel_count == 3
    assert settings.candidate_capacity == 50
    assert settings.max_intensity == 255
    assert settings.scan_far_edge is False
    assert settings.trust_zero_diff is False


@pytest.mark.parametrize("field", ["channel_count", "candidate_capacity", "max_intensity"])
def test_match_settings_rejects_non_positive_values(field):
    with pytest.raises(ValueError, match=field):
        MatchSettings(**{field: 0})


def test_candidate_location():
    assert Candidate(diff=5, x=7, y=1, window_sum=40).location == Point(7, 1)
