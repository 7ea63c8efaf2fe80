"""
Command tokenization and synchronous process invocation
"""

import logging
import subprocess
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from . import utils
from .config import get_config
from .exceptions import CommandFailedError, EmptyCommandError, UnterminatedQuoteError

logger = logging.getLogger(__name__)

TokenizedCommand = List[str]


class OutcomeKind(Enum):
    """How a spawned command ended"""
    SUCCESS = "success"
    NON_ZERO_EXIT = "non_zero_exit"
    SIGNAL_TERMINATED = "signal_terminated"
    SPAWN_FAILED = "spawn_failed"


@dataclass(frozen=True)
class ProcessOutcome:
    """Result of running one command to completion"""

    kind: OutcomeKind
    args: tuple
    returncode: Optional[int] = None
    """Exit status for SUCCESS and NON_ZERO_EXIT"""
    signal: Optional[int] = None
    """Signal number for SIGNAL_TERMINATED"""
    error: Optional[str] = None
    """Host error text for SPAWN_FAILED"""

    @property
    def succeeded(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    def describe(self) -> str:
        if self.kind is OutcomeKind.SUCCESS:
            return "succeeded"
        if self.kind is OutcomeKind.NON_ZERO_EXIT:
            return f"exited with status {self.returncode}"
        if self.kind is OutcomeKind.SIGNAL_TERMINATED:
            return f"was terminated by signal {self.signal}"
        return f"could not be started: {self.error}"


def tokenize(cmdline: str) -> TokenizedCommand:
    """
    Split a command line into arguments

    Text between double quotes becomes a single argument with its whitespace
    preserved; text outside quotes is split on whitespace. Quotes are not
    joined with adjacent unquoted text.

    Raises:
        UnterminatedQuoteError: The line contains an odd number of quotes
        EmptyCommandError: The line holds no arguments at all
    """
    pieces = cmdline.split('"')
    if len(pieces) % 2 == 0:
        raise UnterminatedQuoteError(f"unterminated quote in command: {cmdline}")

    tokens: TokenizedCommand = []
    for index, piece in enumerate(pieces):
        if index % 2:
            tokens.append(piece)
        else:
            tokens.extend(piece.split())

    if not tokens:
        raise EmptyCommandError("command line is empty")
    return tokens


def invoke(tokens: Sequence[str]) -> ProcessOutcome:
    """
    Run a tokenized command and wait for it

    The program is looked up on PATH. Output is not captured.

    Returns:
        Classified outcome of the run
    """
    args = tuple(str(token) for token in tokens)
    if not args:
        raise EmptyCommandError("no program to invoke")

    logger.debug(f"spawning {list(args)}")
    try:
        result = subprocess.run(args, check=False)
    except OSError as e:
        return ProcessOutcome(OutcomeKind.SPAWN_FAILED, args, error=str(e))

    if result.returncode < 0:
        return ProcessOutcome(OutcomeKind.SIGNAL_TERMINATED, args, signal=-result.returncode)
    if result.returncode != 0:
        return ProcessOutcome(OutcomeKind.NON_ZERO_EXIT, args, returncode=result.returncode)
    return ProcessOutcome(OutcomeKind.SUCCESS, args, returncode=0)


def execute(cmdline: str) -> ProcessOutcome:
    """
    Label, tokenize and run a command line, halting the build on failure

    With the dry_run option set the command is only logged.

    Raises:
        CommandFailedError: The command did not finish successfully
    """
    utils.cmd_label(cmdline)
    tokens = tokenize(cmdline)

    if get_config().options.dry_run:
        utils.info(f"[DRY RUN] Would run: {' '.join(tokens)}")
        return ProcessOutcome(OutcomeKind.SUCCESS, tuple(tokens), returncode=0)

    outcome = invoke(tokens)
    if not outcome.succeeded:
        raise CommandFailedError(f"command '{tokens[0]}' {outcome.describe()}", outcome)
    return outcome


__all__ = ["OutcomeKind", "ProcessOutcome", "TokenizedCommand", "tokenize", "invoke", "execute"]
