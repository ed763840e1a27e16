from __future__ import annotations

import json
import os
import sys
from typing import Mapping, Optional, Sequence

from run_one.config import apply_config, resolve_config
from run_one.core.errors import RunOneError
from run_one.core.parser import parse_args
from run_one.core.run_loop import RunLoop


USAGE = "usage: run-one-until-fail <command> [command-arguments...]"


def _format_cli_error(e: Exception) -> str:
    """
    Print-friendly error formatting for CLI commands.
    - Always includes code/message (via __str__) when it's a RunOneError
    - Includes structured `data` payload when present
    """
    if isinstance(e, RunOneError) and isinstance(e.data, dict) and e.data:
        return str(e) + "\n" + json.dumps(e.data, ensure_ascii=False, indent=2)
    return str(e)


def main(argv: Optional[Sequence[str]] = None, environ: Optional[Mapping[str, str]] = None) -> int:
    """
    argv is the full argument vector, including the program's own name at argv[0].
    """
    argv = list(sys.argv if argv is None else argv)
    environ = os.environ if environ is None else environ

    try:
        spec = parse_args(argv, environ.items())
    except RunOneError as e:
        print(_format_cli_error(e), file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 1

    spec = apply_config(spec, resolve_config(environ))

    try:
        RunLoop(spec).run()
    except RunOneError as e:
        print(_format_cli_error(e), file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
