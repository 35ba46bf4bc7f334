# SPDX-License-Identifier: MIT
"""Command-line interface for larva."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from larva.configure.loader import DEFAULT_PROJECT_FILE, load_config
from larva.core.build_context import BuildContext, BuildMode
from larva.core.commands import CLEAN, CommandExecutor
from larva.core.config import Config
from larva.core.errors import LarvaError
from larva.util.commands import CommandRunner

# Set up logging
logger = logging.getLogger("larva")

BUILTIN_COMMANDS: dict[str, str] = {
    "build": "Debug build (default)",
    "release": "Optimized release build",
    "play": "Build and run the executable",
    "assets": "Run post-build steps only",
    CLEAN: "Remove build directories",
}


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging for the requested verbosity.

    Tool output and progress lines go to stdout; the log carries warnings
    and errors, plus per-target detail with -v and module names with --debug.
    """
    if debug:
        level, fmt = logging.DEBUG, "%(levelname)s: %(name)s: %(message)s"
    else:
        level = logging.INFO if verbose else logging.WARNING
        fmt = "larva: %(levelname)s: %(message)s"
    logging.basicConfig(level=level, format=fmt)


def format_usage(config: Config | None = None) -> str:
    """Usage text listing built-in and project commands."""
    lines = ["larva - build system", "", "Usage: larva [command]", ""]
    for name, description in BUILTIN_COMMANDS.items():
        lines.append(f"  {name:<10} {description}")
    if config is not None:
        for name, command in config.commands.items():
            if name not in BUILTIN_COMMANDS:
                lines.append(f"  {name:<10} {command.description}")
    return "\n".join(lines)


def run_command(
    name: str,
    config: Config,
    *,
    root_dir: Path,
    release: bool = False,
    runner: CommandRunner | None = None,
) -> int:
    """Dispatch a command name against a loaded project.

    Returns:
        Exit status. Tool failures propagate as LarvaError.
    """
    if name == "release":
        release = True
        name = "build"
    mode = BuildMode.RELEASE if release else BuildMode.DEBUG

    ctx = BuildContext.create(config, mode=mode, root_dir=root_dir)
    logger.info(
        "Project '%s' (%s, %s), output %s",
        config.project.name,
        ctx.platform.name,
        ctx.mode.value,
        ctx.output_dir,
    )
    executor = CommandExecutor(ctx, runner or CommandRunner())

    if name == "build":
        executor.build()
    elif name == "play":
        executor.play()
    elif name == "assets":
        executor.post_build()
    elif name == CLEAN:
        executor.clean()
    elif name in config.commands:
        executor.run_custom(config.commands[name])
    else:
        print(format_usage(config))
        return 0 if name == "help" else 1
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the larva CLI."""
    parser = argparse.ArgumentParser(
        prog="larva",
        description="Incremental build tool for C and C++ projects.",
        epilog="Run 'larva help' to list the commands of the current project.",
    )
    from larva import __version__

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--debug", action="store_true", help="Debug output")
    parser.add_argument(
        "-f",
        "--file",
        default=DEFAULT_PROJECT_FILE,
        help=f"Project file (default: {DEFAULT_PROJECT_FILE})",
    )
    parser.add_argument(
        "-C",
        "--directory",
        default=".",
        help="Project root directory (default: current directory)",
    )
    parser.add_argument(
        "-r", "--release", action="store_true", help="Use release flags"
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="build",
        help="build, release, play, assets, clean, or a project command",
    )

    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.debug)

    root_dir = Path(args.directory).absolute()
    project_file = Path(args.file)
    if not project_file.is_absolute():
        project_file = root_dir / project_file

    try:
        config = load_config(project_file)
        return run_command(
            args.command, config, root_dir=root_dir, release=args.release
        )
    except LarvaError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
