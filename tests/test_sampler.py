import pytest
from conftest import LastSampler

from randbot.agents.random import RandomAgent
from randbot.sampler import RandomSampler
from randbot.schema import parse_request

OPTIONS = list(range(10))


def test_empty_options_raise():
    with pytest.raises(ValueError, match="empty"):
        RandomSampler(0).sample([])


def test_same_seed_same_sequence():
    a, b = RandomSampler(42), RandomSampler(42)
    assert [a.sample(OPTIONS) for _ in range(50)] == [b.sample(OPTIONS) for _ in range(50)]


def test_seed_is_kept():
    assert RandomSampler(7).seed == 7
    assert RandomSampler().seed is None


def test_picks_come_from_the_options():
    sampler = RandomSampler(3)
    picks = {sampler.sample("abc") for _ in range(200)}
    assert picks == {"a", "b", "c"}


def test_agent_uses_injected_sampler(side):
    agent = RandomAgent(sampler=LastSampler())
    assert agent.choose(parse_request({"teamPreview": True, "side": side(5, 0)})) == "team 5"
