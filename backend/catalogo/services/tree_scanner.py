"""Directory tree scanner: recursive image counts and preview selection."""

from __future__ import annotations

import logging
import os
import re
import stat
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = ("png", "jpg", "jpeg", "webp")

_IMAGE_RE = re.compile(r"\.(%s)$" % "|".join(IMAGE_EXTENSIONS), re.IGNORECASE)


class EntryKind(str, Enum):
    DIRECTORY = "directory"
    IMAGE = "image"
    OTHER = "other"


@dataclass(frozen=True)
class Aggregate:
    count: int = 0
    preview: str | None = None  # servable path, None if the subtree has no images


def is_image_name(name: str) -> bool:
    """True if the file name carries one of the recognised image extensions."""
    return _IMAGE_RE.search(name) is not None


def strip_image_extension(name: str) -> str:
    return _IMAGE_RE.sub("", name)


def to_servable_path(path: str, root: str, prefix: str) -> str:
    """Map a file under ``root`` to its URL path below ``prefix``.

    Separators are always forward slashes, whatever the host uses.
    """
    relative = os.path.relpath(path, root).replace(os.sep, "/")
    if os.altsep:
        relative = relative.replace(os.altsep, "/")
    return f"{prefix.rstrip('/')}/{relative}"


def list_entries(directory: str, sort: bool = False) -> list[str]:
    """Immediate entry names of ``directory``. Raises OSError if unlistable."""
    names = os.listdir(directory)
    if sort:
        names.sort()
    return names


def classify(path: str) -> EntryKind | None:
    """Status-check ``path``; None when the check itself fails.

    Uses ``os.stat`` rather than the listing's type flag, which some
    platforms report unreliably.
    """
    try:
        info = os.stat(path)
    except OSError as exc:
        logger.debug("Skipping %s: %s", path, exc)
        return None

    if stat.S_ISDIR(info.st_mode):
        return EntryKind.DIRECTORY
    if stat.S_ISREG(info.st_mode) and is_image_name(os.path.basename(path)):
        return EntryKind.IMAGE
    return EntryKind.OTHER


def aggregate(directory: str, root: str, prefix: str, sort: bool = False) -> Aggregate:
    """Recursive image count and first-found preview for a subtree.

    Direct images are counted first and the first one listed becomes the
    preview. Subdirectories are then walked depth-first in listing order;
    their preview is adopted only while none has been chosen. An unreadable
    directory contributes ``Aggregate(0, None)``.
    """
    try:
        names = list_entries(directory, sort=sort)
    except OSError as exc:
        logger.warning("Error reading %s: %s", directory, exc)
        return Aggregate()

    images: list[str] = []
    subdirs: list[str] = []
    for name in names:
        full_path = os.path.join(directory, name)
        kind = classify(full_path)
        if kind is EntryKind.DIRECTORY:
            subdirs.append(full_path)
        elif kind is EntryKind.IMAGE:
            images.append(full_path)

    count = len(images)
    preview = to_servable_path(images[0], root, prefix) if images else None

    for subdir in subdirs:
        sub = aggregate(subdir, root, prefix, sort=sort)
        count += sub.count
        if preview is None:
            preview = sub.preview

    return Aggregate(count=count, preview=preview)
