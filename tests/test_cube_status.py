import pytest

from cube_status import CubeStatus
from moves import Move


class Recorder:
    def __init__(self):
        self.messages = []

    def __call__(self, message, in_progress=False):
        self.messages.append((message, in_progress))

    @property
    def texts(self):
        return [m for m, _ in self.messages]


@pytest.fixture
def sink():
    return Recorder()


@pytest.fixture
def session(sink):
    return CubeStatus(status_sink=sink, seed=7)


def test_move_and_invalid_move(session, sink):
    assert session.move("R")
    assert not session.move("Q")
    assert session.cube.history == [Move.R]
    assert sink.texts == ["Applied R", "Invalid move: Q"]


def test_sequence_rejected_as_a_whole(session, sink):
    assert not session.apply_sequence("R U Z")
    assert session.cube.is_solved()
    assert session.apply_sequence("R U R' U'")
    assert len(session.cube.history) == 4


def test_seeded_sessions_scramble_identically():
    a, b = CubeStatus(seed=3), CubeStatus(seed=3)
    assert a.scramble(15) == b.scramble(15)
    assert a.cube.serialize() == b.cube.serialize()


def test_step_by_step_solve(session, sink):
    session.scramble(20)
    assert session.start_solve()
    assert session.in_progress

    first = session.next_step()
    assert first.description == "Starting solution algorithm..."

    # commands are rejected while the solve runs
    before = session.cube.serialize()
    assert not session.move("R")
    assert session.scramble() == []
    assert not session.start_solve()
    assert session.cube.serialize() == before
    assert ("Solve in progress; move ignored.", True) in sink.messages

    while session.next_step() is not None:
        pass
    assert not session.in_progress
    assert session.last_steps[-1].description.startswith("Could not fully solve")
    assert sink.texts[-1] == "Solve incomplete: only the white cross is automated."
    assert session.next_step() is None

    # accepted again afterwards
    assert session.move("U")


def test_solve_on_solved_cube(session, sink):
    result = session.solve()
    assert result.solved
    assert [s.description for s in result.steps] == ["Cube is already solved!"]
    assert sink.texts[-1] == "Cube solved!"


def test_solve_with_callback(session):
    session.scramble(10)
    seen = []
    result = session.solve(on_step=seen.append)
    assert seen == result.steps
    assert not result.solved
    assert result.message == "Incomplete"


def test_abandon_solve_keeps_partial_moves(session):
    session.scramble(20)
    session.start_solve()
    for _ in range(3):
        session.next_step()
    state = session.cube.serialize()
    session.abandon_solve()
    assert not session.in_progress
    assert session.next_step() is None
    assert session.cube.serialize() == state


def test_reset_stops_solve(session):
    session.scramble(5)
    session.start_solve()
    session.next_step()
    session.reset()
    assert not session.in_progress
    assert session.cube.is_solved()
    assert session.cube.history == []


def test_to_dict(session):
    session.move("F")
    data = session.to_dict()
    assert data["history"] == ["F"]
    assert data["solved"] is False
    assert data["in_progress"] is False
    assert len(data["state"]) == 54


def test_renders(session):
    assert session.render_svg().startswith("<svg")
    assert session.render_png()[:4] == b"\x89PNG"
