"""
Path handling for the served root.

Every filesystem location touched on behalf of a client is derived with
``resolve``; raw client strings never reach ``open``/``stat``/``scandir``.
Relative paths are kept in their canonical form: forward slashes, no
leading slash, no ``.``/``..`` segments, ``""`` for the root itself.
"""

import os
import posixpath
from collections import namedtuple

from .errors import PathEscapeError

Breadcrumb = namedtuple("Breadcrumb", ["name", "path"])


def normalize(user_path):
    """Lexically clean a client path into its canonical relative form."""
    if not user_path:
        return ""
    if "\x00" in user_path:
        raise PathEscapeError("path contains a NUL byte")
    # Accept either separator convention.
    cleaned = posixpath.normpath(user_path.replace("\\", "/"))
    cleaned = cleaned.lstrip("/")
    if cleaned == ".":
        return ""
    return cleaned


def resolve(root, user_path):
    """Join ``user_path`` onto ``root`` and verify the result stays inside it.

    Returns the absolute path, or raises ``PathEscapeError``. An empty path
    resolves to ``root`` itself.
    """
    relative = normalize(user_path)
    full = os.path.normpath(os.path.join(root, relative))
    rel = os.path.relpath(full, root)
    if rel == os.pardir or rel.startswith(os.pardir + os.sep) or os.path.isabs(rel):
        raise PathEscapeError()
    return full


def breadcrumbs(relative_path):
    """Split a canonical relative path into (name, cumulative path) pairs."""
    crumbs = []
    current = ""
    for part in relative_path.split("/"):
        if not part:
            continue
        current = posixpath.join(current, part) if current else part
        crumbs.append(Breadcrumb(part, current))
    return crumbs
