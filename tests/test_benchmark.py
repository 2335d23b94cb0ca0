import json

import pytest

from benchmark.export import report_to_dict, write_report
from benchmark.runner import showdown_username
from benchmark.types import BattleResult, BenchmarkReport, TurnStat
from main import build_agent
from randbot.agents.random import RandomAgent


def _stat(agent, choice, kind="move", ms=2.0):
    return TurnStat(battle_tag="battle-gen9randombattle-1", turn=1, agent=agent, decision_ms=ms, request_kind=kind, choice=choice)


@pytest.fixture
def report():
    return BenchmarkReport(
        p1_agent="random-aaaaaa",
        p2_agent="random-bbbbbb",
        n_games=2,
        p1_wins=1,
        p2_wins=1,
        draws=0,
        results=[
            BattleResult("g1", "battle-1", "random-aaaaaa", "random-bbbbbb", "p1", 20, 0.0),
            BattleResult("g2", "battle-2", "random-aaaaaa", "random-bbbbbb", "p2", 30, 0.0),
        ],
        total_duration_s=12.5,
        turn_stats=[
            _stat("random-aaaaaa", "move 1 1 mega, switch 4", ms=1.0),
            _stat("random-aaaaaa", "move 2 zmove, pass", ms=3.0),
            _stat("random-bbbbbb", "team 2", kind="team"),
            _stat("random-bbbbbb", "", kind="wait"),
        ],
    )


def test_report_metrics(report):
    assert report.p1_win_rate == 0.5
    assert report.avg_game_length == 25
    assert report.avg_decision_ms("random-aaaaaa") == 2.0
    assert report.avg_decision_ms("nobody") is None
    assert report.action_counts("random-aaaaaa") == {"move": 2, "mega": 1, "switch": 1, "zmove": 1, "pass": 1}
    assert report.action_counts("random-bbbbbb") == {"team": 1}


def test_write_report(report, tmp_path):
    path = tmp_path / "run.json"
    write_report(report, str(path))
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data == json.loads(json.dumps(report_to_dict(report)))
    assert data["summary"]["p1_wins"] == 1
    assert len(data["battles"]) == 2
    assert data["turn_stats"][2]["request_kind"] == "team"


def test_empty_report():
    empty = BenchmarkReport("a", "b", 0, 0, 0, 0)
    assert empty.p1_win_rate == 0.0
    assert empty.avg_game_length == 0.0


@pytest.mark.parametrize(
    "name, expected",
    [
        ("random-1a2b3c", "random-1a2b3c"),
        ("a-very-long-agent-name-1a2b3c", "a-very-long-1a2b3c"),
        ("weird name!", "weird-name"),
    ],
)
def test_showdown_username(name, expected):
    assert showdown_username(name) == expected
    assert len(showdown_username(name)) <= 18


def test_build_agent():
    assert isinstance(build_agent("random"), RandomAgent)
    seeded = build_agent("random:7")
    same = build_agent("random:7")
    picks = [seeded._sampler.sample(range(100)) for _ in range(5)]
    assert picks == [same._sampler.sample(range(100)) for _ in range(5)]
    with pytest.raises(ValueError):
        build_agent("random:abc")
    with pytest.raises(ValueError):
        build_agent("mistral:large")
