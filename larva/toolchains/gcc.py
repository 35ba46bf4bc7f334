# SPDX-License-Identifier: MIT
"""GCC toolchain: gcc for C, g++ for C++."""

from __future__ import annotations

from larva.toolchains.toolchain import BaseToolchain


class GccToolchain(BaseToolchain):
    """GNU compiler family."""

    def __init__(self) -> None:
        super().__init__("gcc")

    @property
    def c_driver(self) -> str:
        return "gcc"

    @property
    def cxx_driver(self) -> str:
        return "g++"
