# SPDX-License-Identifier: MIT
"""
Larva: a configuration-driven build tool for C and C++ projects.

Larva reads a declarative larva.toml, recompiles only the sources whose
objects are out of date (including header changes recorded in compiler
dependency files), links one executable and runs post-build steps.
"""

from __future__ import annotations

__version__ = "0.2.0"

from larva.configure.loader import load_config  # noqa: E402
from larva.core.build_context import BuildContext, BuildMode  # noqa: E402
from larva.core.config import Config  # noqa: E402
from larva.core.driver import BuildDriver  # noqa: E402
from larva.toolchains import find_toolchain  # noqa: E402

__all__ = [
    "__version__",
    "BuildContext",
    "BuildDriver",
    "BuildMode",
    "Config",
    "find_toolchain",
    "load_config",
]
