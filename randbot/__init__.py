from randbot.agent import BattleAgent
from randbot.sampler import RandomSampler, Sampler
from randbot.schema import (
    Choice,
    ForceSwitchRequest,
    MoveChoice,
    MoveRequest,
    Request,
    SwitchChoice,
    TeamChoice,
    TeamPreviewRequest,
    WaitRequest,
    parse_request,
)

__all__ = [
    "BattleAgent",
    "Choice",
    "ForceSwitchRequest",
    "MoveChoice",
    "MoveRequest",
    "RandomSampler",
    "Request",
    "Sampler",
    "SwitchChoice",
    "TeamChoice",
    "TeamPreviewRequest",
    "WaitRequest",
    "parse_request",
]
