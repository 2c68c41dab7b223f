"""
Directory tree listing.

Entries come back in the order ``os.scandir`` yields them (filesystem
order, not sorted). Symlinks are not followed: a link is listed as a
plain entry with the size of the link itself, so link cycles can never
be expanded.
"""

import logging
import os
import posixpath
from dataclasses import dataclass, field
from typing import List

from .errors import PathEscapeError
from .paths import normalize, resolve

log = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 10


@dataclass
class ListingNode:
    name: str
    size: int
    is_dir: bool
    path: str
    children: List["ListingNode"] = field(default_factory=list)


def _read_entries(root, relative_path):
    directory = resolve(root, relative_path)
    nodes = []
    with os.scandir(directory) as entries:
        for entry in entries:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                size = 0 if is_dir else entry.stat(follow_symlinks=False).st_size
            except OSError:
                # vanished or unreadable between readdir and stat
                continue
            path = posixpath.join(relative_path, entry.name) if relative_path else entry.name
            nodes.append(ListingNode(entry.name, size, is_dir, path))
    return nodes


def list_tree(root, relative_path="", max_depth=DEFAULT_MAX_DEPTH):
    """List ``relative_path`` under ``root``, expanding subdirectories ``max_depth`` levels deep.

    At ``max_depth=0`` directories are returned with no children. Errors
    reading the requested directory itself propagate (``PathEscapeError``,
    ``OSError``); a subdirectory that cannot be read just keeps an empty
    ``children`` list.

    The walk uses an explicit stack, so ``max_depth`` is not limited by the
    interpreter's recursion limit. Each node's children keep directory order.
    """
    if max_depth < 0:
        raise ValueError("max_depth must be non-negative")
    relative_path = normalize(relative_path)
    top = _read_entries(root, relative_path)

    pending = []
    if max_depth > 0:
        pending = [(node, max_depth - 1) for node in top if node.is_dir]
    while pending:
        node, remaining = pending.pop()
        try:
            node.children = _read_entries(root, node.path)
        except (OSError, PathEscapeError) as exc:
            log.debug("Skipping children of %s: %s", node.path, exc)
            continue
        if remaining > 0:
            pending.extend((child, remaining - 1) for child in node.children if child.is_dir)
    return top
