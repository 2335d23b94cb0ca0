"""Typed result containers for benchmark runs."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field


@dataclass
class BattleResult:
    game_id: str
    battle_tag: str
    p1_agent: str  # agent.name
    p2_agent: str
    winner: str  # "p1" | "p2" | "draw"
    n_turns: int
    timestamp: float


@dataclass
class TurnStat:
    battle_tag: str
    turn: int
    agent: str
    decision_ms: float
    request_kind: str  # "wait" | "team" | "switch" | "move"
    choice: str  # the response sent, "" for wait requests


@dataclass
class BenchmarkReport:
    p1_agent: str
    p2_agent: str
    n_games: int
    p1_wins: int
    p2_wins: int
    draws: int
    results: list[BattleResult] = field(default_factory=list)
    total_duration_s: float = 0.0
    turn_stats: list[TurnStat] = field(default_factory=list)

    @property
    def p1_win_rate(self) -> float:
        if self.n_games == 0:
            return 0.0
        return self.p1_wins / self.n_games

    @property
    def avg_game_length(self) -> float:
        if not self.results:
            return 0.0
        return sum(r.n_turns for r in self.results) / len(self.results)

    def avg_decision_ms(self, agent: str) -> float | None:
        rows = [t for t in self.turn_stats if t.agent == agent]
        if not rows:
            return None
        return sum(t.decision_ms for t in rows) / len(rows)

    def action_counts(self, agent: str) -> dict[str, int]:
        """How often each action kind (move, switch, pass, team, mega, ...) was sent."""
        counts: Counter[str] = Counter()
        for t in self.turn_stats:
            if t.agent != agent or not t.choice:
                continue
            for action in t.choice.split(", "):
                words = action.split()
                counts[words[0]] += 1
                if words[0] == "move" and words[-1] in ("zmove", "mega", "ultra", "dynamax"):
                    counts[words[-1]] += 1
        return dict(counts)
