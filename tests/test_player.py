from types import SimpleNamespace

import pytest
from conftest import FirstSampler
from poke_env.player.battle_order import DefaultBattleOrder
from poke_env.ps_client import AccountConfiguration

from randbot.agents.random import RandomAgent
from randbot.player import AgentPlayer, ChoiceOrder


@pytest.fixture
def player():
    return AgentPlayer(
        RandomAgent(sampler=FirstSampler()),
        account_configuration=AccountConfiguration("randbot-test", None),
        start_listening=False,
    )


def _battle(request, turn=3):
    return SimpleNamespace(battle_tag="battle-gen9randombattle-42", turn=turn, last_request=request)


def test_choice_order_message():
    order = ChoiceOrder("move 1 2 mega, switch 3")
    assert order.message == "/choose move 1 2 mega, switch 3"
    assert str(order) == order.message


def test_choose_move(player, singles_request):
    order = player.choose_move(_battle(singles_request))
    assert isinstance(order, ChoiceOrder)
    assert order.message == "/choose move 1"

    (stat,) = player.turn_stats
    assert stat.battle_tag == "battle-gen9randombattle-42"
    assert stat.turn == 3
    assert stat.request_kind == "move"
    assert stat.choice == "move 1"
    assert stat.agent == player.agent.name


def test_wait_request_falls_back_to_default(player):
    order = player.choose_move(_battle({"wait": True, "side": None}))
    assert isinstance(order, DefaultBattleOrder)
    assert player.turn_stats[0].choice == ""


def test_teampreview(player, side):
    assert player.teampreview(_battle({"teamPreview": True, "side": side(6, 0)}, turn=0)) == "/team 2"
