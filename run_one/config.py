from __future__ import annotations

import dataclasses
import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

import jsonschema
import yaml

from run_one.core.errors import RunOneError, ValidationError
from run_one.core.run_spec import RunSpec


CONFIG_ENV = "RUN_ONE_CONFIG"

_SCHEMA_PATH = Path(__file__).resolve().parent / "contracts" / "schemas" / "config.schema.json"

Reporter = Callable[[RunOneError], None]


@dataclass(frozen=True)
class Config:
    wait: Optional[int] = None


def _report_to_stderr(err: RunOneError) -> None:
    print(str(err), file=sys.stderr)


def default_config_path(environ: Mapping[str, str]) -> Path:
    """
    Default per-user config location.

    - If XDG_CONFIG_HOME is set, use it.
    - Else use ~/.config
    """
    base = environ.get("XDG_CONFIG_HOME")
    if isinstance(base, str) and base.strip():
        return Path(base).expanduser() / "run-one" / "config.yml"
    return Path("~/.config").expanduser() / "run-one" / "config.yml"


def _load_schema() -> Dict[str, Any]:
    try:
        return json.loads(_SCHEMA_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ValidationError(code="config.schema_missing", message="Config schema missing or unreadable", data={"path": str(_SCHEMA_PATH)}) from e


def load_config(path: Path) -> Config:
    p = path.expanduser()
    if not p.exists():
        raise ValidationError(code="config.not_found", message=f"Config not found: {path}")
    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8"))
    except OSError as e:
        raise ValidationError(code="config.unreadable", message=f"Failed to read config: {path}", data={"error": repr(e)}) from e
    except yaml.YAMLError as e:
        raise ValidationError(code="config.invalid_yaml", message="Failed to parse YAML config", data={"error": repr(e)}) from e
    if raw is None:
        return Config()
    if not isinstance(raw, dict):
        raise ValidationError(code="config.invalid", message="Config must be a YAML mapping/object at top-level")

    try:
        jsonschema.Draft202012Validator(_load_schema()).validate(raw)
    except jsonschema.ValidationError as e:
        raise ValidationError(
            code="config.schema_invalid",
            message=f"Config does not match schema: {e.message}",
            data={"path": list(e.path), "schema_path": list(e.schema_path)},
        ) from e

    return Config(wait=raw.get("wait"))


def resolve_config(environ: Mapping[str, str], *, report: Optional[Reporter] = None) -> Config:
    """
    Load the config named by RUN_ONE_CONFIG, else the default per-user file
    when present.

    Config problems never stop a run: they are reported and an empty Config
    is used instead.
    """
    report = report or _report_to_stderr
    explicit = environ.get(CONFIG_ENV)
    if isinstance(explicit, str) and explicit.strip():
        p = Path(explicit)
    else:
        p = default_config_path(environ)
        if not p.exists():
            return Config()
    try:
        return load_config(p)
    except ValidationError as e:
        report(e)
        return Config()


def apply_config(spec: RunSpec, config: Config) -> RunSpec:
    # RUN_ONE_WAIT (already folded into spec) wins over the config file.
    if spec.wait_seconds is None and config.wait is not None:
        return dataclasses.replace(spec, wait_seconds=config.wait)
    return spec
