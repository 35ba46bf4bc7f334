# SPDX-License-Identifier: MIT
"""Toolchain base class.

A Toolchain is a compiler family: a C driver and a C++ driver that share
a command-line dialect. The same driver is used to compile and, as the
linker front end, to link.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from larva.core.config import is_cxx_language


class BaseToolchain(ABC):
    """Abstract base class for gcc-style compiler families.

    Subclasses only name their drivers; command construction is shared.
    """

    compile_only_flag = "-c"
    no_warnings_flag = "-w"
    output_flag = "-o"
    include_prefix = "-I"
    libdir_prefix = "-L"
    lib_prefix = "-l"

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    @abstractmethod
    def c_driver(self) -> str:
        """Command used for C sources."""
        ...

    @property
    @abstractmethod
    def cxx_driver(self) -> str:
        """Command used for C++ sources."""
        ...

    def driver_for(self, language: str) -> str:
        """Driver for a language tag; C++ tags select the C++ driver."""
        return self.cxx_driver if is_cxx_language(language) else self.c_driver

    def std_flag(self, language: str) -> str:
        return f"-std={language}"

    def source_suffix(self, language: str) -> str:
        return ".cpp" if is_cxx_language(language) else ".c"

    def depflags(self, depfile: str) -> list[str]:
        """Flags asking the compiler to write a dependency file."""
        return ["-MD", "-MF", depfile]

    def compile_command(
        self,
        language: str,
        source: str,
        obj: str,
        depfile: str,
        *,
        flags: Sequence[str] = (),
        includes: Sequence[str] = (),
    ) -> list[str]:
        """Full compile command line, driver first."""
        return [
            self.driver_for(language),
            self.compile_only_flag,
            self.std_flag(language),
            self.no_warnings_flag,
            *self.depflags(depfile),
            *flags,
            *(f"{self.include_prefix}{inc}" for inc in includes),
            source,
            self.output_flag,
            obj,
        ]

    def link_command(
        self,
        language: str,
        objects: Sequence[str],
        output: str,
        *,
        libdirs: Sequence[str] = (),
        libs: Sequence[str] = (),
    ) -> list[str]:
        """Full link command line, driver first."""
        return [
            self.driver_for(language),
            *objects,
            self.output_flag,
            output,
            *(f"{self.libdir_prefix}{d}" for d in libdirs),
            *(f"{self.lib_prefix}{lib}" for lib in libs),
        ]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r}, cc={self.c_driver!r}, cxx={self.cxx_driver!r})"
