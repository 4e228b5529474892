"""Resolve a single user supplied path into a list of archive files.

The path may name an archive file, a directory holding archive files or a
``<directory>/<prefix>`` combination selecting the archive files in that
directory whose names start with the prefix.

Copyright (c) 2024 Pixelgen Technologies AB.
"""
from __future__ import annotations

import logging
import os
from typing import Callable

from cramsqs.constants import CRAM_MARKER, DEFAULT_MAX_FILES, UNMATCHED_MARKER
from cramsqs.types import CandidatePaths

logger = logging.getLogger(__name__)


def is_archive_name(name: str) -> bool:
    """Return True if `name` looks like an archive file that should be included.

    :param name: a directory entry name
    :returns: True if the name contains `.cram` and is not an unmatched file
    """
    return CRAM_MARKER in name and UNMATCHED_MARKER not in name


def _collect(
    directory: str,
    join_prefix: str,
    accept: Callable[[str], bool],
    max_files: int,
) -> CandidatePaths:
    """Collect at most `max_files` entries of `directory` accepted by `accept`.

    Entries are returned in filesystem enumeration order, joined to
    `join_prefix` with a `/`. An unreadable directory yields no entries.
    """
    found: CandidatePaths = []
    try:
        with os.scandir(directory) as it:
            for entry in it:
                if not accept(entry.name):
                    continue
                found.append(f"{join_prefix}/{entry.name}")
                if len(found) >= max_files:
                    break
    except OSError as exc:
        logger.debug("Could not list directory %s: %s", directory, exc)
        return []

    return found


def resolve(path: str, max_files: int = DEFAULT_MAX_FILES) -> CandidatePaths:
    """Turn a file, directory or `<directory>/<prefix>` path into archive paths.

    The rules are applied in this order:

    1. `path` is a regular file: it is returned as is, whatever its name.
    2. `path` is a directory: all entries whose name contains `.cram` and
       not `unmatched` are returned as `<path>/<name>`.
    3. Otherwise `path` is split at the last `/` into a search directory
       (`.` when there is no `/`) and a file name prefix. Entries starting
       with the prefix, containing `.cram` and not `unmatched` are returned
       as `<directory>/<name>`.

    Directory listings are returned in enumeration order, the caller is
    responsible for sorting. `max_files` only limits directory listings, a
    regular file is always returned.

    :param path: the path given by the user
    :param max_files: the maximum number of paths to return
    :returns: the file itself or at most `max_files` directory entries,
              possibly empty
    """
    if os.path.isfile(path):
        logger.debug("%s is a regular file", path)
        return [path]

    if max_files <= 0:
        return []

    if os.path.isdir(path):
        logger.debug("Searching directory %s for archive files", path)
        return _collect(path, path, is_archive_name, max_files)

    head, sep, prefix = path.rpartition("/")
    if not sep:
        search_dir, join_prefix = ".", "."
    else:
        # "/prefix" searches the filesystem root
        search_dir, join_prefix = head or "/", head

    logger.debug(
        "Searching directory %s for archive files starting with '%s'",
        search_dir,
        prefix,
    )
    return _collect(
        search_dir,
        join_prefix,
        lambda name: name.startswith(prefix) and is_archive_name(name),
        max_files,
    )
