# SPDX-License-Identifier: MIT
"""Tests for larva.toolchains.gcc."""

import pytest

from larva.core.errors import ToolchainError
from larva.toolchains import GccToolchain, LlvmToolchain, find_toolchain


class TestGccToolchain:
    def test_drivers(self):
        tc = GccToolchain()
        assert tc.name == "gcc"
        assert tc.driver_for("c99") == "gcc"
        assert tc.driver_for("c++17") == "g++"

    def test_std_flag_and_suffix(self):
        tc = GccToolchain()
        assert tc.std_flag("c11") == "-std=c11"
        assert tc.source_suffix("c11") == ".c"
        assert tc.source_suffix("c++20") == ".cpp"

    def test_compile_command(self):
        cmd = GccToolchain().compile_command(
            "c99",
            "src/main.c",
            "build/main.o",
            "build/main.d",
            flags=["-g", "-O0"],
            includes=["include", "vendor/include"],
        )
        assert cmd == [
            "gcc",
            "-c",
            "-std=c99",
            "-w",
            "-MD",
            "-MF",
            "build/main.d",
            "-g",
            "-O0",
            "-Iinclude",
            "-Ivendor/include",
            "src/main.c",
            "-o",
            "build/main.o",
        ]

    def test_link_command(self):
        cmd = GccToolchain().link_command(
            "c++20",
            ["build/a.o", "build/b.o"],
            "build/game",
            libdirs=["/usr/lib"],
            libs=["SDL2", "m"],
        )
        assert cmd == [
            "g++",
            "build/a.o",
            "build/b.o",
            "-o",
            "build/game",
            "-L/usr/lib",
            "-lSDL2",
            "-lm",
        ]

    def test_link_without_libraries(self):
        cmd = GccToolchain().link_command("c99", ["a.o"], "game")
        assert cmd == ["gcc", "a.o", "-o", "game"]


class TestFindToolchain:
    @pytest.mark.parametrize("name", [None, "", "gcc", "GNU"])
    def test_gcc_names(self, name):
        assert isinstance(find_toolchain(name), GccToolchain)

    @pytest.mark.parametrize("name", ["clang", "llvm", "Clang"])
    def test_llvm_names(self, name):
        assert isinstance(find_toolchain(name), LlvmToolchain)

    def test_unknown(self):
        with pytest.raises(ToolchainError, match="unknown compiler family 'msvc'"):
            find_toolchain("msvc")
