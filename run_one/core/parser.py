from __future__ import annotations

import re
import sys
from typing import Callable, Iterable, Optional, Sequence, Tuple

from .errors import ArgumentError, InvalidWaitValue, RunOneError
from .run_spec import RunSpec


WAIT_ENV = "RUN_ONE_WAIT"

# Digits with an optional leading '+'; no whitespace, sign or separators.
_WAIT_RE = re.compile(r"\+?[0-9]+")

Reporter = Callable[[RunOneError], None]


def _report_to_stderr(err: RunOneError) -> None:
    print(str(err), file=sys.stderr)


def find_env(env_pairs: Iterable[Tuple[str, str]], key: str) -> Optional[str]:
    """
    Linear scan for the first pair whose key equals `key`; later duplicates are ignored.
    """
    for k, v in env_pairs:
        if k == key:
            return v
    return None


def parse_wait(raw: str) -> int:
    if not _WAIT_RE.fullmatch(raw):
        raise InvalidWaitValue(
            code="env.invalid_wait",
            message=f"Invalid value for {WAIT_ENV}: {raw!r}",
            data={"value": raw},
        )
    return int(raw)


def parse_args(
    args: Sequence[str],
    env_pairs: Iterable[Tuple[str, str]],
    *,
    report: Optional[Reporter] = None,
) -> RunSpec:
    """
    Build a RunSpec from the raw argument vector and environment pairs.

    args[0] is the wrapper's own name and is discarded, args[1] is the program,
    the rest are passed through untouched.
    """
    report = report or _report_to_stderr
    remaining = list(args)

    if not remaining:
        raise ArgumentError(code="args.missing_program_name", message="Unable to get the name of the program.")
    remaining.pop(0)

    if not remaining:
        raise ArgumentError(code="args.missing_command", message="Unable to get the command.")
    program = remaining.pop(0)
    if not program:
        raise ArgumentError(code="args.missing_command", message="Command must be a non-empty string.")

    wait: Optional[int] = None
    raw_wait = find_env(env_pairs, WAIT_ENV)
    if raw_wait is not None:
        try:
            wait = parse_wait(raw_wait)
        except InvalidWaitValue as e:
            report(e)

    return RunSpec(program=program, arguments=tuple(remaining), wait_seconds=wait)
