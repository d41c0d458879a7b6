# ups_solver/logger.py
# Lightweight logging for the packer and optimizer.
# info/warn go to the console unless disabled; debug lines (one per engine run,
# one per skipped candidate) only show up in verbose mode.

from __future__ import annotations

import sys
from dataclasses import dataclass


@dataclass
class Logger:
    enabled: bool = True
    verbose: bool = False
    prefix: str = "[UPS]"

    def debug(self, msg: str) -> None:
        if self.enabled and self.verbose:
            print(f"{self.prefix} {msg}", file=sys.stdout)

    def info(self, msg: str) -> None:
        if self.enabled:
            print(f"{self.prefix} {msg}", file=sys.stdout)

    def warn(self, msg: str) -> None:
        if self.enabled:
            print(f"{self.prefix} WARNING: {msg}", file=sys.stderr)

    def error(self, msg: str) -> None:
        # errors are never muted
        print(f"{self.prefix} ERROR: {msg}", file=sys.stderr)


LOGGER = Logger(enabled=True)


def set_enabled(flag: bool) -> None:
    LOGGER.enabled = bool(flag)


def set_verbose(flag: bool) -> None:
    LOGGER.verbose = bool(flag)


def get_logger() -> Logger:
    return LOGGER
