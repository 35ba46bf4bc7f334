# SPDX-License-Identifier: MIT
"""Build the example projects in examples/ with a real compiler.

Each example is copied to a temporary directory and built through the
CLI entry point. Skipped when gcc is not on PATH.
"""

from __future__ import annotations

import os
import shutil
import subprocess
import time
from pathlib import Path

import pytest

from larva.cli import main
from larva.configure.platform import get_platform

EXAMPLES_DIR = Path(__file__).parent.parent / "examples"

pytestmark = pytest.mark.skipif(
    shutil.which("gcc") is None, reason="gcc not found in PATH"
)


@pytest.fixture
def hello(tmp_path: Path) -> Path:
    dest = tmp_path / "01_hello_c"
    shutil.copytree(EXAMPLES_DIR / "01_hello_c", dest)
    return dest


def _exe(root: Path) -> Path:
    return root / "build" / get_platform().exe_name("hello")


def _future(path: Path) -> None:
    t = time.time() + 100
    os.utime(path, (t, t))


class TestHelloC:
    def test_build_and_run(self, hello: Path):
        assert main(["-C", str(hello)]) == 0
        assert (hello / "build" / "obj" / "main.o").exists()
        assert (hello / "build" / "obj" / "greet.o").exists()
        assert (hello / "build" / "obj" / "main.d").exists()
        assert (hello / "build" / "readme.txt").exists()

        result = subprocess.run([str(_exe(hello))], capture_output=True, text=True)
        assert result.returncode == 0
        assert result.stdout.strip() == "Hello from larva (debug)"

    def test_rebuild_is_incremental(self, hello: Path, capfd):
        assert main(["-C", str(hello)]) == 0
        capfd.readouterr()

        assert main(["-C", str(hello)]) == 0
        out = capfd.readouterr().out
        assert "skip main.c (unchanged)" in out
        assert "skip greet.c (unchanged)" in out
        assert " -c " not in out

    def test_header_change_recompiles(self, hello: Path, capfd):
        assert main(["-C", str(hello)]) == 0
        capfd.readouterr()

        _future(hello / "include" / "greet.h")
        assert main(["-C", str(hello)]) == 0
        out = capfd.readouterr().out
        assert "src/main.c -o build/obj/main.o" in out
        assert "lib/greet.c -o build/obj/greet.o" in out

    def test_release(self, hello: Path):
        assert main(["-C", str(hello), "release"]) == 0
        result = subprocess.run([str(_exe(hello))], capture_output=True, text=True)
        assert result.stdout.strip() == "Hello from larva (release)"

    def test_compile_error(self, hello: Path, caplog):
        (hello / "src" / "main.c").write_text("int main(void) { return }\n")
        assert main(["-C", str(hello)]) == 1
        assert "command failed" in caplog.text
        assert not _exe(hello).exists()

    def test_clean(self, hello: Path):
        assert main(["-C", str(hello)]) == 0
        assert main(["-C", str(hello), "clean"]) == 0
        assert not (hello / "build").exists()
