# SPDX-License-Identifier: MIT
"""Reader for compiler-generated dependency files.

gcc and clang write Make-style rules when given `-MD -MF <file>`:

    build/main.o: src/main.c include/a.h \
      include/b.h

Only the dependency list matters to larva. Backslash-newline
continuations are collapsed to whitespace, everything up to the first
colon is dropped and the remainder is split on whitespace.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def parse_depfile(text: str) -> list[str]:
    """Return the dependency paths listed in depfile text."""
    text = text.replace("\\\r\n", " ").replace("\\\n", " ")
    _, sep, deps = text.partition(":")
    if not sep:
        return []
    return deps.split()


def read_depfile(path: Path | str) -> list[str]:
    """Read and parse a dependency file.

    A missing or unreadable file yields no dependencies; this is the normal
    state before the first compile.
    """
    try:
        text = Path(path).read_text(errors="replace")
    except OSError as e:
        logger.debug("No dependency file %s (%s)", path, e)
        return []
    return parse_depfile(text)
