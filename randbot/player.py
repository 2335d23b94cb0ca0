"""
AgentPlayer: poke-env bridge. Written once, never modified.

poke-env keeps the raw request of every battle; we decode it, let the
BattleAgent answer, and hand the choice string back as a BattleOrder.
To use a different model, pass a different BattleAgent — that's all.
"""

from __future__ import annotations

import logging
import time

from poke_env.battle.abstract_battle import AbstractBattle
from poke_env.player.battle_order import BattleOrder, DefaultBattleOrder
from poke_env.player.player import Player

from benchmark.types import TurnStat
from randbot.agent import BattleAgent
from randbot.schema import parse_request, request_kind

logger = logging.getLogger(__name__)


class ChoiceOrder(BattleOrder):
    """A ready-made choice string, e.g. `move 1 2 dynamax, switch 4`."""

    def __init__(self, choice: str) -> None:
        self.choice = choice

    @property
    def message(self) -> str:
        return f"/choose {self.choice}"

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"ChoiceOrder({self.choice!r})"


class AgentPlayer(Player):
    def __init__(self, agent: BattleAgent, **kwargs) -> None:
        super().__init__(**kwargs)
        self._agent = agent
        self._turn_stats: list[TurnStat] = []

    @property
    def agent(self) -> BattleAgent:
        return self._agent

    @property
    def turn_stats(self) -> list[TurnStat]:
        return self._turn_stats

    def _decide(self, battle: AbstractBattle) -> str | None:
        request = parse_request(battle.last_request)

        t0 = time.perf_counter()
        choice = self._agent.choose(request)
        decision_ms = (time.perf_counter() - t0) * 1000

        self._turn_stats.append(
            TurnStat(
                battle_tag=battle.battle_tag,
                turn=battle.turn,
                agent=self._agent.name,
                decision_ms=decision_ms,
                request_kind=request_kind(request),
                choice=choice or "",
            )
        )
        logger.debug(
            "[%s] Turn %d · %s request → %s", self.username, battle.turn, request_kind(request), choice
        )
        return choice

    def choose_move(self, battle: AbstractBattle) -> BattleOrder:
        choice = self._decide(battle)
        if choice is None:
            return DefaultBattleOrder()
        return ChoiceOrder(choice)

    def teampreview(self, battle: AbstractBattle) -> str:
        choice = self._decide(battle)
        if choice is None:
            return DefaultBattleOrder().message
        return f"/{choice}"
