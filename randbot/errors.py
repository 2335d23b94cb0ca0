"""Exceptions raised by the choice policy and its transports."""

from __future__ import annotations

UNAVAILABLE_CHOICE_PREFIX = "[Unavailable choice]"


class RandbotError(Exception):
    """Base class for every error raised by randbot."""


class MalformedRequestError(RandbotError, ValueError):
    """A request does not match the shape the simulator promises."""


class InvalidChoiceError(RandbotError, ValueError):
    """A choice string is not a valid action."""


class HostError(RandbotError):
    """The simulator rejected a choice for a reason we cannot recover from."""


class UnavailableChoiceError(HostError):
    """The simulator rejected a choice because of hidden state (e.g. a trap).

    It follows up with a fresh request, so this is never fatal.
    """


def classify_host_error(message: str) -> HostError:
    if message.startswith(UNAVAILABLE_CHOICE_PREFIX):
        return UnavailableChoiceError(message)
    return HostError(message)
