from .errors import ArgumentError, ChildWaitError, InvalidWaitValue, RunOneError, ValidationError
from .run_spec import RunSpec
from .parser import WAIT_ENV, parse_args
from .executor import ExecutionFailure, Outcome, SpawnFailure, Success, execute_once
from .run_loop import RunLoop, RunReport

__all__ = [
  "ArgumentError",
  "ChildWaitError",
  "InvalidWaitValue",
  "RunOneError",
  "ValidationError",
  "RunSpec",
  "WAIT_ENV",
  "parse_args",
  "ExecutionFailure",
  "Outcome",
  "SpawnFailure",
  "Success",
  "execute_once",
  "RunLoop",
  "RunReport",
]
