import pytest

from cube_state import CubeState


@pytest.fixture
def cube():
    return CubeState()


@pytest.fixture
def scrambled():
    def _make(seed: int, n: int = 25) -> CubeState:
        c = CubeState()
        c.scramble(n, seed)
        return c
    return _make
