# SPDX-License-Identifier: MIT
"""Load larva.toml into the immutable project model."""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from larva.core.config import (
    TARGET_KINDS,
    BuildModeFlags,
    Config,
    CustomCommand,
    PlatformOverlay,
    PostBuildStep,
    Project,
    Target,
)
from larva.core.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_FILE = "larva.toml"


def load_config(path: Path | str = DEFAULT_PROJECT_FILE) -> Config:
    """Read and validate a project file.

    Raises:
        ConfigError: The file is missing, is not valid TOML, or describes
            an invalid project.
    """
    path = Path(path)
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        raise ConfigError("project file not found", path) from None
    except OSError as e:
        raise ConfigError(f"cannot read project file: {e.strerror}", path) from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"invalid TOML: {e}", path) from e
    return parse_config(data, path)


def parse_config(data: Mapping[str, Any], path: Path | str | None = None) -> Config:
    """Build a Config from already-decoded TOML data."""
    project_data = _table(data, "project", path)
    name = _string(project_data, "name", "", path)
    if not name:
        raise ConfigError("[project] name is required", path)

    variables = _table(project_data, "variables", path)
    project = Project(
        name=name,
        build_cache=_string(project_data, "build_cache", "", path) or None,
        compiler=_string(project_data, "compiler", "", path) or None,
        variables={str(k): str(v) for k, v in variables.items()},
    )

    targets = {
        tname: _parse_target(tname, tdata, path)
        for tname, tdata in _entries(data, "targets", path).items()
    }

    steps = data.get("post_build", [])
    if not isinstance(steps, list) or not all(isinstance(s, Mapping) for s in steps):
        raise ConfigError("'post_build' must be an array of tables", path)
    post_build = tuple(
        PostBuildStep(
            target=_string(step, "target", "", path),
            copy=_strings(step, "copy", path),
            run_linux=_string(step, "run_linux", "", path),
            run_windows=_string(step, "run_windows", "", path),
        )
        for step in steps
    )

    commands = {
        cname: CustomCommand(
            name=cname,
            description=_string(cdata, "description", "", path),
            steps=_strings(cdata, "steps", path),
            remove=_strings(cdata, "remove", path),
        )
        for cname, cdata in _entries(data, "commands", path).items()
    }

    logger.debug(
        "Loaded project '%s': %d target(s), %d post-build step(s), %d command(s)",
        project.name,
        len(targets),
        len(post_build),
        len(commands),
    )
    return Config(
        project=project,
        targets=targets,
        post_build=post_build,
        commands=commands,
    )


def _parse_target(name: str, data: Mapping[str, Any], path: Path | str | None) -> Target:
    kind = _string(data, "kind", "object", path)
    if kind not in TARGET_KINDS:
        raise ConfigError(
            f"target '{name}': kind must be one of {', '.join(TARGET_KINDS)}, got '{kind}'",
            path,
        )
    platforms = {
        pname: PlatformOverlay(
            includes=_strings(pdata, "includes", path),
            libdirs=_strings(pdata, "libdirs", path),
            links=_strings(pdata, "links", path),
            output=_string(pdata, "output", "", path),
        )
        for pname, pdata in _entries(data, "platform", path).items()
    }
    return Target(
        name=name,
        kind=kind,
        language=_string(data, "language", "c99", path) or "c99",
        sources=_strings(data, "sources", path),
        includes=_strings(data, "includes", path),
        deps=_strings(data, "deps", path),
        platform=platforms,
        debug=BuildModeFlags(_strings(_table(data, "debug", path), "flags", path)),
        release=BuildModeFlags(_strings(_table(data, "release", path), "flags", path)),
    )


def _table(data: Mapping[str, Any], key: str, path: Path | str | None) -> Mapping[str, Any]:
    value = data.get(key, {})
    if not isinstance(value, Mapping):
        raise ConfigError(f"'{key}' must be a table", path)
    return value


def _entries(
    data: Mapping[str, Any], key: str, path: Path | str | None
) -> Mapping[str, Mapping[str, Any]]:
    """A table whose values must all be tables, e.g. [targets.<name>]."""
    table = _table(data, key, path)
    for name, value in table.items():
        if not isinstance(value, Mapping):
            raise ConfigError(f"'{key}.{name}' must be a table", path)
    return table


def _string(
    data: Mapping[str, Any], key: str, default: str, path: Path | str | None
) -> str:
    value = data.get(key, default)
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' must be a string, got {type(value).__name__}", path)
    return value


def _strings(data: Mapping[str, Any], key: str, path: Path | str | None) -> tuple[str, ...]:
    value = data.get(key, [])
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' must be a list of strings", path)
    return tuple(value)
