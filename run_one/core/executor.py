from __future__ import annotations

import signal
import subprocess
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from .errors import ChildWaitError
from .run_spec import RunSpec


Spawn = Callable[[list[str]], Any]
Sleep = Callable[[float], None]


@dataclass(frozen=True)
class Success:
    code = "run.ok"

    returncode: int = 0

    @property
    def ok(self) -> bool:
        return True

    def describe(self) -> str:
        return "Command succeeded"


@dataclass(frozen=True)
class SpawnFailure:
    """
    The child could not be launched at all (missing executable, no permission, ...).
    """

    code = "run.spawn_failed"

    program: str
    error: str

    @property
    def ok(self) -> bool:
        return False

    def describe(self) -> str:
        return f"Failed to execute command {self.program!r}: {self.error}"


@dataclass(frozen=True)
class ExecutionFailure:
    """
    The child ran and terminated unsuccessfully.

    A negative returncode means the child was killed by that signal number.
    """

    code = "run.execution_failed"

    program: str
    returncode: int

    @property
    def ok(self) -> bool:
        return False

    def status_text(self) -> str:
        if self.returncode < 0:
            signum = -self.returncode
            try:
                name = signal.Signals(signum).name
            except ValueError:
                return f"signal: {signum}"
            return f"signal: {signum} ({name})"
        return f"exit status: {self.returncode}"

    def describe(self) -> str:
        return f"Command failed with {self.status_text()}"


Outcome = Union[Success, SpawnFailure, ExecutionFailure]
Failure = Union[SpawnFailure, ExecutionFailure]


def _popen(cmd: list[str]) -> subprocess.Popen:
    # stdin/stdout/stderr are inherited from this process.
    return subprocess.Popen(cmd)


def execute_once(
    spec: RunSpec,
    *,
    spawn: Optional[Spawn] = None,
    sleep: Optional[Sleep] = None,
) -> Outcome:
    """
    Spawn spec.program once, wait for it, and classify the result.

    The post-run delay is applied after every attempt, including failed spawns.
    Errors while waiting on an already spawned child are not an outcome: they
    raise ChildWaitError.
    """
    spawn = spawn or _popen
    sleep = sleep or time.sleep

    outcome: Outcome
    try:
        child = spawn(spec.command())
    except OSError as e:
        outcome = SpawnFailure(program=spec.program, error=e.strerror or str(e))
    else:
        try:
            returncode = child.wait()
        except OSError as e:
            raise ChildWaitError(
                code="run.wait_failed",
                message=f"Failed to wait for command {spec.program!r}",
                data={"program": spec.program, "error": repr(e)},
            ) from e
        if returncode == 0:
            outcome = Success()
        else:
            outcome = ExecutionFailure(program=spec.program, returncode=returncode)

    if spec.wait_seconds is not None:
        sleep(spec.wait_seconds)

    return outcome
