import numpy as np
import pytest


@pytest.fixture
def rng():
    return np.random.default_rng(20150929)


@pytest.fixture
def haystack(rng):
    # 60 wide, 40 tall BGR image
    return rng.integers(0, 256, size=(40, 60, 3), dtype=np.uint8)


def solid(width, height, color=(128, 128, 128)):
    image = np.empty((height, width, 3), dtype=np.uint8)
    image[:, :] = color
    return image
