"""
Choice wire format: formatting options and decoding response strings.

A response is one action per acting slot joined with ", ":
    pass | switch <n> | team <n> | move <n>[ <target>][ zmove|mega|ultra|dynamax]
"""

from __future__ import annotations

import re

from randbot.errors import InvalidChoiceError
from randbot.schema import Choice, MoveChoice, SwitchChoice, TeamChoice

TRANSFORMATIONS = ("mega", "ultra", "dynamax")

_MOVE_RE = re.compile(r"^move ([1-9]\d*)(?: (-?[1-9]\d*))?(?: (zmove|mega|ultra|dynamax))?$")
_SLOT_RE = re.compile(r"^(switch|team) ([1-9]\d*)$")


def format_choice(choice: Choice | None, transformation: str | None = None) -> str:
    """Render one option as an action. None renders as `pass`."""
    if choice is None:
        return "pass"
    if isinstance(choice, SwitchChoice):
        return f"switch {choice.slot}"
    if isinstance(choice, TeamChoice):
        return f"team {choice.slot}"
    if isinstance(choice, MoveChoice):
        if choice.is_z:
            return f"{choice.choice} zmove"
        if choice.changed:
            if transformation not in TRANSFORMATIONS:
                raise InvalidChoiceError(
                    f"Transformed move '{choice.choice}' needs one of {TRANSFORMATIONS}, "
                    f"got {transformation!r}"
                )
            return f"{choice.choice} {transformation}"
        return choice.choice
    raise InvalidChoiceError(f"Unknown choice type {type(choice).__name__}")


def parse_action(text: str) -> Choice | None:
    """Decode a single action. Returns None for `pass`."""
    text = text.strip()
    if text == "pass":
        return None

    m = _SLOT_RE.match(text)
    if m:
        kind, slot = m.group(1), int(m.group(2))
        return SwitchChoice(slot=slot) if kind == "switch" else TeamChoice(slot=slot)

    m = _MOVE_RE.match(text)
    if m:
        slot, target, flag = m.groups()
        choice = f"move {slot} {target}" if target else f"move {slot}"
        return MoveChoice(
            choice=choice,
            is_z=flag == "zmove",
            changed=flag in TRANSFORMATIONS,
        )

    raise InvalidChoiceError(f"Not a valid action: '{text}'")


def parse_choice(text: str) -> list[Choice | None]:
    """Decode a full response into one entry per action."""
    if not text.strip():
        raise InvalidChoiceError("Empty choice")
    return [parse_action(part) for part in text.split(",")]
