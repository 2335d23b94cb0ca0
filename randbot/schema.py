"""
Data contract between the simulator's requests and the choice policy.

Requests arrive as JSON objects on the `|request|` line of a player stream.
parse_request() decodes them into the dataclasses below; everything downstream
works on these types only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from randbot.errors import MalformedRequestError

FAINTED_SUFFIX = " fnt"


@dataclass
class MoveSlot:
    move: str
    target: str  # "normal" | "any" | "adjacentFoe" | "adjacentAlly" | "adjacentAllyOrSelf" | ...
    pp: int = 0
    maxpp: int = 0
    disabled: bool = False


@dataclass
class ZMoveSlot:
    move: str
    target: str


@dataclass
class ActivePokemon:
    moves: list[MoveSlot] = field(default_factory=list)
    max_moves: list[MoveSlot] | None = None  # set while dynamaxed or able to dynamax
    can_z_move: list[ZMoveSlot | None] | None = None  # parallel to `moves`
    can_dynamax: bool = False
    can_mega_evo: bool = False
    can_ultra_burst: bool = False
    trapped: bool = False
    maybe_trapped: bool = False
    fainted: bool = False

    @property
    def has_z_move(self) -> bool:
        return bool(self.can_z_move) and any(z is not None for z in self.can_z_move)


@dataclass
class SidePokemon:
    ident: str
    condition: str  # "<hp>/<maxhp>[ <status>]" or "0 fnt"
    active: bool = False
    details: str = ""
    moves: list[str] = field(default_factory=list)  # Showdown move IDs
    item: str = ""
    ability: str | None = None

    @property
    def fainted(self) -> bool:
        return self.condition.endswith(FAINTED_SUFFIX)


@dataclass
class WaitRequest:
    pass


@dataclass
class TeamPreviewRequest:
    pokemon: list[SidePokemon]


@dataclass
class ForceSwitchRequest:
    pokemon: list[SidePokemon]
    force_switch: list[bool]


@dataclass
class MoveRequest:
    pokemon: list[SidePokemon]
    active: list[ActivePokemon | None]


Request = WaitRequest | TeamPreviewRequest | ForceSwitchRequest | MoveRequest


@dataclass(frozen=True)
class MoveChoice:
    choice: str  # "move <n>[ <target>]"
    is_z: bool = False
    changed: bool = False  # paired with mega / ultra burst / dynamax


@dataclass(frozen=True)
class SwitchChoice:
    slot: int  # 1-based roster position


@dataclass(frozen=True)
class TeamChoice:
    slot: int  # 1-based roster position


Choice = MoveChoice | SwitchChoice | TeamChoice


def request_kind(request: Request) -> str:
    """Short name used in logs and turn stats."""
    if isinstance(request, WaitRequest):
        return "wait"
    if isinstance(request, TeamPreviewRequest):
        return "team"
    if isinstance(request, ForceSwitchRequest):
        return "switch"
    if isinstance(request, MoveRequest):
        return "move"
    raise MalformedRequestError(f"Unknown request type {type(request).__name__}")


# ---------------------------------------------------------------------------
# JSON decoding
# ---------------------------------------------------------------------------


def _require(data: dict[str, Any], key: str, where: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise MalformedRequestError(f"{where} is missing '{key}'") from None


def _object(value: Any, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise MalformedRequestError(f"{where} must be an object, got {value!r}")
    return value


def _parse_move_slot(data: Any) -> MoveSlot:
    data = _object(data, "move slot")
    return MoveSlot(
        move=str(_require(data, "move", "move slot")),
        target=str(data.get("target", "normal")),
        pp=int(data.get("pp", 0)),
        maxpp=int(data.get("maxpp", 0)),
        disabled=bool(data.get("disabled", False)),
    )


def _parse_z_move(data: Any) -> ZMoveSlot | None:
    if not data:
        return None
    data = _object(data, "Z-move slot")
    return ZMoveSlot(
        move=str(_require(data, "move", "Z-move slot")),
        target=str(data.get("target", "normal")),
    )


def _parse_active(data: Any) -> ActivePokemon | None:
    if data is None:
        return None
    data = _object(data, "Active slot")

    max_moves = None
    if data.get("maxMoves"):
        max_moves = [
            _parse_move_slot(m) for m in _object(data["maxMoves"], "maxMoves").get("maxMoves", [])
        ]

    can_z_move = None
    if data.get("canZMove"):
        can_z_move = [_parse_z_move(z) for z in data["canZMove"]]

    return ActivePokemon(
        moves=[_parse_move_slot(m) for m in data.get("moves", [])],
        max_moves=max_moves,
        can_z_move=can_z_move,
        can_dynamax=bool(data.get("canDynamax", False)),
        can_mega_evo=bool(data.get("canMegaEvo", False)),
        can_ultra_burst=bool(data.get("canUltraBurst", False)),
        trapped=bool(data.get("trapped", False)),
        maybe_trapped=bool(data.get("maybeTrapped", False)),
        fainted=bool(data.get("fainted", False)),
    )


def _parse_side_pokemon(data: Any) -> SidePokemon:
    data = _object(data, "side pokemon")
    return SidePokemon(
        ident=str(_require(data, "ident", "side pokemon")),
        condition=str(_require(data, "condition", "side pokemon")),
        active=bool(data.get("active", False)),
        details=str(data.get("details", "")),
        moves=[str(m) for m in data.get("moves", [])],
        item=str(data.get("item", "")),
        ability=data.get("ability"),
    )


def _parse_side(data: dict[str, Any]) -> list[SidePokemon]:
    side = _object(_require(data, "side", "request"), "request 'side'")
    return [_parse_side_pokemon(p) for p in _require(side, "pokemon", "side")]


def _check_active_count(pokemon: list[SidePokemon], n_slots: int, what: str) -> None:
    n_active = sum(p.active for p in pokemon)
    if n_active > n_slots:
        raise MalformedRequestError(
            f"Side has {n_active} active pokemon but {what} has {n_slots} slots"
        )


def parse_request(data: dict[str, Any]) -> Request:
    """Decode a simulator request object into a Request.

    Raises MalformedRequestError if the object matches none of the request
    shapes or breaks the roster/acting-slot contract. A side may have fewer
    pokemon than positions (a one-pokemon team in doubles); the extra slots
    are then null and simply pass.
    """
    if not isinstance(data, dict):
        raise MalformedRequestError(f"Request must be an object, got {type(data).__name__}")

    if data.get("wait"):
        return WaitRequest()

    if data.get("teamPreview"):
        return TeamPreviewRequest(pokemon=_parse_side(data))

    if "forceSwitch" in data:
        pokemon = _parse_side(data)
        force_switch = [bool(s) for s in data["forceSwitch"]]
        _check_active_count(pokemon, len(force_switch), "forceSwitch")
        return ForceSwitchRequest(pokemon=pokemon, force_switch=force_switch)

    if "active" in data:
        pokemon = _parse_side(data)
        active = [_parse_active(a) for a in data["active"]]
        _check_active_count(pokemon, len(active), "active")
        for i, slot in enumerate(active):
            if slot is not None and i >= len(pokemon):
                raise MalformedRequestError(
                    f"Acting slot {i + 1} has no pokemon; the side has {len(pokemon)}"
                )
        return MoveRequest(pokemon=pokemon, active=active)

    raise MalformedRequestError(f"Unrecognised request with keys {sorted(data)}")
