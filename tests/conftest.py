"""Shared request builders. Requests are built as the simulator sends them (JSON-shaped dicts)."""

from collections.abc import Sequence

import pytest

from randbot.sampler import Sampler


class FirstSampler(Sampler):
    """Always picks the first option."""

    def __init__(self):
        self.seen = []

    def sample(self, options):
        self.seen.append(list(options))
        return options[0]


class LastSampler(Sampler):
    """Always picks the last option."""

    def sample(self, options):
        return options[-1]


class PreferSampler(Sampler):
    """Picks the first option matching `predicate`, else the first option."""

    def __init__(self, predicate):
        self.predicate = predicate

    def sample(self, options):
        return next((o for o in options if self.predicate(o)), options[0])


def _mon(name, active=False, fainted=False, moves=("tackle",)):
    return {
        "ident": f"p1: {name}",
        "details": f"{name}, L80",
        "condition": "0 fnt" if fainted else "200/200",
        "active": active,
        "moves": list(moves),
        "item": "leftovers",
        "pokeball": "pokeball",
    }


def _move(name, target="normal", disabled=False, pp=16):
    return {"move": name, "id": name.lower(), "pp": pp, "maxpp": 16, "target": target, "disabled": disabled}


def _active(moves: Sequence[dict] | None = None, **flags):
    data = {"moves": list(moves) if moves is not None else [_move("Tackle"), _move("Growl", "allAdjacentFoes")]}
    data.update(flags)
    return data


@pytest.fixture
def mon():
    return _mon


@pytest.fixture
def move():
    return _move


@pytest.fixture
def active():
    return _active


@pytest.fixture
def side(mon):
    def build(n=6, n_active=1, fainted=()):
        return {
            "name": "randbot",
            "id": "p1",
            "pokemon": [
                mon(f"Mon{i}", active=i <= n_active, fainted=i in fainted) for i in range(1, n + 1)
            ],
        }

    return build


@pytest.fixture
def singles_request(side, active):
    return {"active": [active()], "side": side(6, 1), "rqid": 3}


@pytest.fixture
def doubles_request(side, active):
    return {"active": [active(), active()], "side": side(6, 2), "rqid": 7}
