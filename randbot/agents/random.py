"""RandomAgent: picks uniformly among all legal options each turn."""

from __future__ import annotations

import logging
import uuid

from randbot.agent import BattleAgent
from randbot.errors import MalformedRequestError
from randbot.options import (
    Constraints,
    force_switch_options,
    move_options,
    team_options,
)
from randbot.sampler import RandomSampler, Sampler
from randbot.schema import (
    ForceSwitchRequest,
    MoveChoice,
    MoveRequest,
    Request,
    SwitchChoice,
    TeamPreviewRequest,
    WaitRequest,
)
from randbot.wire import format_choice

logger = logging.getLogger(__name__)


class RandomAgent(BattleAgent):
    """Chooses uniformly at random among every option the request allows.

    Acting slots are decided left to right: a slot sees the switch targets
    and transformations already claimed by the slots before it.
    """

    def __init__(self, sampler: Sampler | None = None, seed: int | None = None) -> None:
        self._sampler = sampler if sampler is not None else RandomSampler(seed)
        self._name = f"random-{uuid.uuid4().hex[:6]}"

    @property
    def name(self) -> str:
        return self._name

    def choose(self, request: Request) -> str | None:
        if isinstance(request, WaitRequest):
            return None
        if isinstance(request, TeamPreviewRequest):
            return self._choose_team(request)
        if isinstance(request, ForceSwitchRequest):
            return self._choose_switches(request)
        if isinstance(request, MoveRequest):
            return self._choose_moves(request)
        raise MalformedRequestError(f"Unknown request type {type(request).__name__}")

    def _choose_team(self, request: TeamPreviewRequest) -> str:
        options = team_options(request.pokemon)
        if not options:
            raise MalformedRequestError("Team preview needs at least two pokemon")
        choice = self._sampler.sample(options)
        logger.debug("[%s] Team preview: %d options → %s", self._name, len(options), choice)
        return format_choice(choice)

    def _choose_switches(self, request: ForceSwitchRequest) -> str:
        chosen: frozenset[int] = frozenset()
        choices: list[str] = []
        for must_switch in request.force_switch:
            # Slots that are not forced to switch pass explicitly.
            options = (
                force_switch_options(request.pokemon, len(request.force_switch), chosen)
                if must_switch
                else []
            )
            if not options:
                choices.append(format_choice(None))
                continue
            choice = self._sampler.sample(options)
            chosen |= {choice.slot}
            choices.append(format_choice(choice))

        logger.debug("[%s] Forced switch → %s", self._name, choices)
        return ", ".join(choices)

    def _choose_moves(self, request: MoveRequest) -> str:
        pokemon = request.pokemon
        multi = len(request.active) > 1
        constraints = Constraints()
        choices: list[str] = []

        for i, active in enumerate(request.active):
            if active is None or active.fainted or pokemon[i].fainted:
                choices.append(format_choice(None))
                continue

            constraints = constraints.narrow(active)
            options = move_options(i, active, pokemon, constraints, multi=multi)
            if not options:
                raise MalformedRequestError(f"Acting slot {i + 1} has no move or switch to choose")

            choice = self._sampler.sample(options)
            logger.debug("[%s] Slot %d: %d options → %s", self._name, i + 1, len(options), choice)
            if active.maybe_trapped and isinstance(choice, SwitchChoice):
                logger.debug("[%s] Slot %d may be trapped; the switch can be rejected", self._name, i + 1)

            transformation = None
            if isinstance(choice, SwitchChoice):
                constraints = constraints.switch_in(choice.slot)
            elif isinstance(choice, MoveChoice) and choice.is_z:
                constraints = constraints.spend_z_move()
            elif isinstance(choice, MoveChoice) and choice.changed:
                constraints, transformation = constraints.spend_transformation()
            choices.append(format_choice(choice, transformation))

        return ", ".join(choices)
