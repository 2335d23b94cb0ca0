"""
Option enumeration: every legal choice implied by a request.

All functions here are pure. Cross-slot bookkeeping for one request lives in
Constraints, which the policy threads through its left-to-right fold over
acting slots. Enumeration order is deterministic; only the final pick is
random.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from randbot.schema import (
    ActivePokemon,
    MoveChoice,
    MoveSlot,
    SidePokemon,
    SwitchChoice,
    TeamChoice,
    ZMoveSlot,
)

_FOE_TARGETS = ("normal", "any", "adjacentFoe")


@dataclass(frozen=True)
class Constraints:
    """Per-request state shared by all acting slots on one side."""

    chosen: frozenset[int] = frozenset()  # roster slots already switched in
    can_mega_evo: bool = True
    can_ultra_burst: bool = True
    can_z_move: bool = True
    can_dynamax: bool = True

    @property
    def can_change(self) -> bool:
        """Whether a whole-side transformation is still on the table."""
        return self.can_mega_evo or self.can_ultra_burst or self.can_dynamax

    def narrow(self, active: ActivePokemon) -> Constraints:
        return replace(
            self,
            can_mega_evo=self.can_mega_evo and active.can_mega_evo,
            can_ultra_burst=self.can_ultra_burst and active.can_ultra_burst,
            can_z_move=self.can_z_move and active.has_z_move,
            can_dynamax=self.can_dynamax and active.can_dynamax,
        )

    def switch_in(self, slot: int) -> Constraints:
        return replace(self, chosen=self.chosen | {slot})

    def spend_z_move(self) -> Constraints:
        return replace(self, can_z_move=False)

    def spend_transformation(self) -> tuple[Constraints, str]:
        """Consume dynamax, mega or ultra burst (in that order).

        Returns the new constraints and the choice suffix. Only one
        transformation is allowed per side per turn, so all three flags are
        cleared.
        """
        if self.can_dynamax:
            suffix = "dynamax"
        elif self.can_mega_evo:
            suffix = "mega"
        elif self.can_ultra_burst:
            suffix = "ultra"
        else:
            raise ValueError("No transformation left to spend this turn")
        spent = replace(self, can_mega_evo=False, can_ultra_burst=False, can_dynamax=False)
        return spent, suffix


def team_options(pokemon: list[SidePokemon]) -> list[TeamChoice]:
    # Slot 1 is the default lead. Illusion could make other orders matter; ignored.
    return [TeamChoice(slot=slot) for slot in range(2, len(pokemon) + 1)]


def _can_switch_to(mon: SidePokemon | None, slot: int, chosen: frozenset[int]) -> bool:
    return mon is not None and slot not in chosen and not mon.fainted


def force_switch_options(
    pokemon: list[SidePokemon],
    active_count: int,
    chosen: frozenset[int] = frozenset(),
) -> list[SwitchChoice]:
    """Replacements for one forced switch. Empty means the slot must pass."""
    return [
        SwitchChoice(slot=slot)
        for slot, mon in enumerate(pokemon, start=1)
        if slot > active_count and _can_switch_to(mon, slot, chosen)
    ]


def switch_options(pokemon: list[SidePokemon], chosen: frozenset[int]) -> list[SwitchChoice]:
    """Voluntary switch targets: every benched, living, unclaimed pokemon."""
    return [
        SwitchChoice(slot=slot)
        for slot, mon in enumerate(pokemon, start=1)
        if not mon.active and _can_switch_to(mon, slot, chosen)
    ]


def has_living_ally(pokemon: list[SidePokemon], index: int) -> bool:
    ally = index ^ 1
    return len(pokemon) > 1 and ally < len(pokemon) and not pokemon[ally].fainted


def move_targets(target: str, index: int, has_ally: bool, multi: bool) -> list[int]:
    """Target indices for a move; 0 means no explicit target."""
    if not multi:
        return [0]
    if target in _FOE_TARGETS:
        return [1, 2]
    if target == "adjacentAlly":
        return [-((index ^ 1) + 1)]
    if target == "adjacentAllyOrSelf":
        return [-1, -2] if has_ally else [-(index + 1)]
    return [0]


def _candidate_moves(
    active: ActivePokemon,
    changed: bool,
    constraints: Constraints,
) -> list[tuple[int, MoveSlot | ZMoveSlot, bool]]:
    use_max_moves = (not active.can_dynamax and active.max_moves) or (
        changed and constraints.can_dynamax
    )
    possible = active.max_moves if use_max_moves else active.moves

    # PP is deliberately not checked: the simulator disables empty moves itself,
    # and some rules (gen 1 Wrap) require picking a move with 0 PP.
    candidates: list[tuple[int, MoveSlot | ZMoveSlot, bool]] = [
        (slot, move, False)
        for slot, move in enumerate(possible or [], start=1)
        if not move.disabled
    ]
    if constraints.can_z_move and not changed and not use_max_moves:
        candidates += [
            (slot, zmove, True)
            for slot, zmove in enumerate(active.can_z_move or [], start=1)
            if zmove is not None
        ]
    return candidates


def move_options(
    index: int,
    active: ActivePokemon,
    pokemon: list[SidePokemon],
    constraints: Constraints,
    multi: bool = False,
) -> list[MoveChoice | SwitchChoice]:
    """Every move and switch the acting slot `index` may choose.

    `constraints` must already be narrowed to this slot's eligibility.
    `multi` is true when the side has more than one acting slot.
    """
    options: list[MoveChoice | SwitchChoice] = []
    has_ally = has_living_ally(pokemon, index)

    for changed in (False, True) if constraints.can_change else (False,):
        candidates = _candidate_moves(active, changed, constraints)
        filtered = [c for c in candidates if c[1].target != "adjacentAlly" or has_ally]

        for slot, move, is_z in filtered or candidates:
            choice = f"move {slot}"
            for target in move_targets(move.target, index, has_ally, multi):
                options.append(
                    MoveChoice(
                        choice=f"{choice} {target}" if target else choice,
                        is_z=is_z,
                        changed=changed,
                    )
                )

    if not active.trapped:
        options += switch_options(pokemon, constraints.chosen)

    return options
