# SPDX-License-Identifier: MIT
"""Variable substitution for flags, hook commands and exec steps.

Templates refer to values with `{name}` tokens. The built-in tokens form
a closed set (see Placeholder); any other token is looked up in the
project's `[project.variables]` table. Expansion is a single pass:

- Replacement values are never re-scanned, so `{a}` -> "{b}" stays "{b}".
- Unknown tokens are left verbatim.
- There is no escape syntax; `{output}` in a template is always replaced.
- Built-in tokens take precedence over user variables of the same name.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from larva.core.build_context import BuildContext


class Placeholder(str, Enum):
    """Built-in substitution tokens."""

    ROOT = "root"
    OUTPUT = "output"
    EXE = "exe"


_TOKEN_PATTERN = re.compile(r"\{([^{}]+)\}")


class Expander:
    """Resolves `{name}` tokens against a fixed set of values.

    Example:
        expander = Expander.from_context(ctx)
        expander.expand("{output}/{exe}")  # "build/game"
    """

    def __init__(
        self,
        builtins: Mapping[Placeholder, str],
        variables: Mapping[str, str] | None = None,
    ) -> None:
        self._values: dict[str, str] = dict(variables or {})
        for placeholder, value in builtins.items():
            self._values[placeholder.value] = value

    @classmethod
    def from_context(cls, ctx: BuildContext) -> Expander:
        return cls(
            {
                Placeholder.ROOT: ctx.root_dir.as_posix(),
                Placeholder.OUTPUT: _display_path(ctx),
                Placeholder.EXE: ctx.exe_name,
            },
            ctx.config.project.variables,
        )

    @property
    def values(self) -> dict[str, str]:
        return dict(self._values)

    def expand(self, template: str) -> str:
        def replace(match: re.Match[str]) -> str:
            return self._values.get(match.group(1), match.group(0))

        return _TOKEN_PATTERN.sub(replace, template)

    def expand_all(self, templates: list[str] | tuple[str, ...]) -> list[str]:
        return [self.expand(t) for t in templates]


def _display_path(ctx: BuildContext) -> str:
    """Output directory relative to the root when possible, like larva.toml writes it."""
    try:
        rel = ctx.output_dir.relative_to(ctx.root_dir)
    except ValueError:
        return ctx.output_dir.as_posix()
    return rel.as_posix()
