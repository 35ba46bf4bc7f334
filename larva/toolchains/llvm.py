# SPDX-License-Identifier: MIT
"""LLVM toolchain: clang for C, clang++ for C++.

Clang accepts the same compile, dependency and link flags as gcc, so
only the driver names differ.
"""

from __future__ import annotations

from larva.toolchains.toolchain import BaseToolchain


class LlvmToolchain(BaseToolchain):
    """Clang compiler family."""

    def __init__(self) -> None:
        super().__init__("llvm")

    @property
    def c_driver(self) -> str:
        return "clang"

    @property
    def cxx_driver(self) -> str:
        return "clang++"
