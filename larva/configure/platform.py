# SPDX-License-Identifier: MIT
"""Host platform detection.

larva only distinguishes Windows from everything else; platform overlays
in larva.toml are keyed by "windows" or "linux" accordingly.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from functools import lru_cache

WINDOWS = "windows"
DEFAULT = "linux"


@dataclass(frozen=True)
class Platform:
    """Properties of a build platform.

    Attributes:
        name: Overlay key ("windows" or "linux").
        exe_suffix: Suffix appended to linked executables.
        object_suffix: Suffix of compiled object files.
        depfile_suffix: Suffix of compiler-generated dependency files.
    """

    name: str
    exe_suffix: str = ""
    object_suffix: str = ".o"
    depfile_suffix: str = ".d"

    @property
    def is_windows(self) -> bool:
        return self.name == WINDOWS

    def exe_name(self, base: str) -> str:
        """Executable file name for a project name."""
        return base + self.exe_suffix


def platform_for(name: str) -> Platform:
    """Build a Platform by overlay key."""
    if name == WINDOWS:
        return Platform(WINDOWS, exe_suffix=".exe")
    return Platform(name)


@lru_cache(maxsize=1)
def get_platform() -> Platform:
    """Detect the host platform."""
    return platform_for(WINDOWS if sys.platform == "win32" else DEFAULT)
