"""
BattleStreamPlayer: drives a BattleAgent from a simulator player stream.

The stream is line oriented. Only two messages matter to us:
    |request|<json>    a request to answer
    |error|<message>   a rejected choice
Everything else (battle log lines, blank lines) is ignored.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable

from randbot.agent import BattleAgent
from randbot.errors import MalformedRequestError
from randbot.schema import parse_request, request_kind

logger = logging.getLogger(__name__)


class BattleStreamPlayer:
    def __init__(self, agent: BattleAgent) -> None:
        self._agent = agent

    @property
    def agent(self) -> BattleAgent:
        return self._agent

    def receive(self, chunk: str) -> list[str]:
        """Feed a chunk of the stream; returns the choices to write back."""
        responses = []
        for line in chunk.split("\n"):
            response = self.receive_line(line)
            if response is not None:
                responses.append(response)
        return responses

    def receive_line(self, line: str) -> str | None:
        line = line.rstrip("\r\n")
        if not line.startswith("|"):
            return None
        cmd, _, rest = line[1:].partition("|")
        if cmd == "request":
            return self.receive_request(rest)
        if cmd == "error":
            self._agent.receive_error(rest)
        return None

    def receive_request(self, raw: str) -> str | None:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise MalformedRequestError(f"Request is not valid JSON: {e}") from e

        request = parse_request(data)
        choice = self._agent.choose(request)
        logger.debug("[%s] %s request → %s", self._agent.name, request_kind(request), choice)
        return choice

    def run(self, lines: Iterable[str], write: Callable[[str], None]) -> int:
        """Answer every request in `lines`; returns the number of choices written."""
        n = 0
        for line in lines:
            response = self.receive_line(line)
            if response is not None:
                write(response)
                n += 1
        return n
