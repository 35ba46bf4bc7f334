# SPDX-License-Identifier: MIT
"""Decide whether derived files must be regenerated.

Timestamps are compared at nanosecond resolution and "newer" always
means strictly newer.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from larva.core.depfile import read_depfile

logger = logging.getLogger(__name__)


def _mtime(path: Path | str) -> int | None:
    try:
        return os.stat(path).st_mtime_ns
    except OSError:
        return None


def needs_copy(src: Path | str, dest: Path | str) -> bool:
    """True if dest is missing or older than src.

    A missing src also reports True so the caller surfaces the error.
    """
    dest_time = _mtime(dest)
    if dest_time is None:
        return True
    src_time = _mtime(src)
    if src_time is None:
        return True
    return src_time > dest_time


def needs_rebuild(
    source: Path | str,
    obj: Path | str,
    depfile: Path | str,
    *,
    base_dir: Path | None = None,
) -> bool:
    """True if `obj` must be recompiled from `source`.

    Checked in order: the object is missing, the source is missing, the
    source is newer than the object, or any existing dependency listed in
    `depfile` is newer than the object.

    Args:
        source: Source file.
        obj: Object file produced from it.
        depfile: Dependency file written by the previous compile.
        base_dir: Directory the compiler ran in; relative paths in the
            dependency file are resolved against it.
    """
    obj_time = _mtime(obj)
    if obj_time is None:
        logger.debug("%s: no object, rebuilding", source)
        return True

    src_time = _mtime(source)
    if src_time is None:
        logger.debug("%s: source missing, rebuilding", source)
        return True
    if src_time > obj_time:
        logger.debug("%s: source newer than %s", source, obj)
        return True

    for dep in read_depfile(depfile):
        dep_path = Path(dep)
        if base_dir is not None and not dep_path.is_absolute():
            dep_path = base_dir / dep_path
        dep_time = _mtime(dep_path)
        if dep_time is not None and dep_time > obj_time:
            logger.debug("%s: dependency %s changed", source, dep)
            return True

    return False
