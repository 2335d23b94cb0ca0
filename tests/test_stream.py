import json

import pytest
from conftest import FirstSampler

from randbot.agents.random import RandomAgent
from randbot.errors import HostError, MalformedRequestError
from randbot.stream import BattleStreamPlayer


@pytest.fixture
def player():
    return BattleStreamPlayer(RandomAgent(sampler=FirstSampler()))


def test_answers_requests(player, singles_request):
    chunk = "\n".join(
        [
            "|request|" + json.dumps(singles_request),
            "",
            "|t:|1700000000",
            "|turn|1",
        ]
    )
    assert player.receive(chunk) == ["move 1"]


def test_wait_request_is_silent(player):
    assert player.receive('|request|{"wait": true, "side": null}') == []


def test_ignores_battle_log(player):
    assert player.receive("|move|p1a: Mon1|Tackle|p2a: Foe\nupdate\n") == []


def test_unavailable_choice_waits_for_a_new_request(player, singles_request):
    singles_request["active"][0]["trapped"] = True
    chunk = "\n".join(
        [
            "|error|[Unavailable choice] Can't switch: The active Pokémon is trapped",
            "|request|" + json.dumps(singles_request),
        ]
    )
    assert player.receive(chunk) == ["move 1"]


def test_other_errors_propagate(player):
    with pytest.raises(HostError):
        player.receive("|error|[Invalid choice] There's nothing to choose")


def test_bad_json(player):
    with pytest.raises(MalformedRequestError):
        player.receive("|request|{not json")


def test_run_writes_every_choice(side, singles_request):
    lines = [
        "|request|" + json.dumps({"teamPreview": True, "side": side(6, 0)}) + "\r\n",
        "|request|" + json.dumps(singles_request) + "\n",
        "|request|" + json.dumps({"forceSwitch": [True], "side": side(6, 1, fainted=(1,))}) + "\n",
    ]
    out = []
    n = BattleStreamPlayer(RandomAgent(sampler=FirstSampler())).run(lines, out.append)
    assert n == 3
    assert out == ["team 2", "move 1", "switch 2"]
