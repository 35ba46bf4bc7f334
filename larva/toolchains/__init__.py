# SPDX-License-Identifier: MIT
"""Toolchain definitions (GCC, LLVM)."""

from __future__ import annotations

from larva.core.errors import ToolchainError
from larva.toolchains.gcc import GccToolchain
from larva.toolchains.llvm import LlvmToolchain
from larva.toolchains.toolchain import BaseToolchain

_FAMILIES: dict[str, type[BaseToolchain]] = {
    "gcc": GccToolchain,
    "gnu": GccToolchain,
    "clang": LlvmToolchain,
    "llvm": LlvmToolchain,
}


def find_toolchain(name: str | None = None) -> BaseToolchain:
    """Return the toolchain for a compiler family name.

    Args:
        name: "gcc"/"gnu" or "clang"/"llvm" (case-insensitive). None or an
            empty string selects gcc.

    Raises:
        ToolchainError: The name is not a supported family.
    """
    key = (name or "gcc").lower()
    try:
        return _FAMILIES[key]()
    except KeyError:
        supported = ", ".join(sorted(_FAMILIES))
        raise ToolchainError(
            f"unknown compiler family '{name}' (supported: {supported})"
        ) from None


__all__ = [
    "BaseToolchain",
    "GccToolchain",
    "LlvmToolchain",
    "find_toolchain",
]
