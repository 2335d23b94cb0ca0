"""CLI: python -m randbot [--seed N] < player-stream

Reads a simulator player stream on stdin and writes one choice per line on
stdout. Log output goes to stderr.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from dotenv import load_dotenv

from randbot.agents.random import RandomAgent
from randbot.stream import BattleStreamPlayer

logger = logging.getLogger(__name__)


def _env_seed() -> int | None:
    raw = os.getenv("RANDBOT_SEED")
    return int(raw) if raw else None


def main() -> None:
    load_dotenv()
    parser = argparse.ArgumentParser(
        prog="python -m randbot",
        description="Answer simulator requests read from stdin with random legal choices.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=_env_seed(),
        help="Sampler seed (also reads RANDBOT_SEED). Default: unseeded.",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL", "INFO").upper(),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log verbosity (also reads LOG_LEVEL env var). Default: INFO.",
    )
    args = parser.parse_args()

    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)-8s] %(name)s — %(message)s",
        datefmt="%H:%M:%S",
    )

    player = BattleStreamPlayer(RandomAgent(seed=args.seed))
    logger.info("Reading player stream from stdin (seed=%s)", args.seed)

    def write(choice: str) -> None:
        sys.stdout.write(choice + "\n")
        sys.stdout.flush()

    n = player.run(sys.stdin, write)
    logger.info("Stream closed after %d choice(s)", n)


if __name__ == "__main__":
    main()
