from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Callable, Optional, TextIO

from .executor import Failure, Outcome, execute_once
from .run_spec import RunSpec


BELL = "\a"

ExecuteOnce = Callable[[RunSpec], Outcome]


@dataclass(frozen=True)
class RunReport:
    iterations: int
    outcome: Failure


def ring_bell(out: TextIO) -> None:
    out.write(BELL)
    out.flush()


class RunLoop:
    """
    Re-runs a RunSpec until the first failing iteration.

    States: running -> stopped. Any failure outcome stops the loop; a
    diagnostic goes to `err` and exactly one bell goes to `out`. The bell also
    fires when the loop is left through an exception (wait error, interrupt).
    """

    def __init__(
        self,
        spec: RunSpec,
        *,
        execute: Optional[ExecuteOnce] = None,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
    ):
        self._spec = spec
        self._execute = execute or execute_once
        self._out = out
        self._err = err

    @property
    def spec(self) -> RunSpec:
        return self._spec

    def run(self) -> RunReport:
        out = self._out or sys.stdout
        err = self._err or sys.stderr

        iteration = 0
        try:
            while True:
                iteration += 1
                outcome = self._execute(self._spec)
                if not outcome.ok:
                    break

            print(f"{outcome.code}: {outcome.describe()} (iteration {iteration})", file=err)
        finally:
            ring_bell(out)

        return RunReport(iterations=iteration, outcome=outcome)
