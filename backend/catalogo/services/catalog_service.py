"""Catalog service: home category listing and per-path directory resolution."""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Sequence
from urllib.parse import unquote

from catalogo.schemas.catalog import (
    Category,
    CategoryItem,
    DirectoryContent,
    ImageItem,
)
from catalogo.services.tree_scanner import (
    Aggregate,
    EntryKind,
    aggregate,
    classify,
    list_entries,
    strip_image_extension,
    to_servable_path,
)

logger = logging.getLogger(__name__)

TRAVERSAL_TOKEN = ".."


def parent_path(segments: Sequence[str]) -> str:
    """URL path of the listing one level up ("/" for top-level categories)."""
    if len(segments) > 1:
        return "/" + "/".join(segments[:-1])
    return "/"


class CatalogService:
    """Builds catalog listings from the directory tree under ``images_root``.

    Every call reads the filesystem afresh; nothing is cached between calls.
    """

    def __init__(self, images_root: str, url_prefix: str = "/images", sort_entries: bool = False):
        self._root = os.path.abspath(images_root)
        self._prefix = url_prefix
        self._sort = sort_entries

    @property
    def images_root(self) -> str:
        return self._root

    def root_exists(self) -> bool:
        return os.path.isdir(self._root)

    # ------------------------------------------------------------------
    # Home view
    # ------------------------------------------------------------------

    async def list_categories(self) -> list[Category]:
        """One category per directory directly under the image root.

        A missing image root is an empty catalog, not an error.
        """
        scanned = await asyncio.to_thread(self._scan_root)
        if scanned is None:
            return []

        dirs, _ = scanned
        results = await self._aggregate_all(dirs)

        return [
            Category(
                name=os.path.basename(path),
                slug=os.path.basename(path),
                image_count=result.count,
                preview_image=result.preview,
            )
            for path, result in zip(dirs, results)
        ]

    async def static_params(self) -> list[list[str]]:
        """Segment lists to pre-render: the top-level categories."""
        return [[category.slug] for category in await self.list_categories()]

    # ------------------------------------------------------------------
    # Detail view
    # ------------------------------------------------------------------

    async def resolve(self, segments: Sequence[str]) -> DirectoryContent | None:
        """Resolve raw (percent-encoded) path segments to their directory listing.

        Returns None for unsafe, missing or non-directory paths; callers
        treat that as not found.
        """
        if not segments:
            return None

        decoded = [unquote(segment) for segment in segments]
        rel_path = os.sep.join(decoded)
        if TRAVERSAL_TOKEN in rel_path:
            logger.debug("Rejected traversal path %r", rel_path)
            return None

        full_path = self._absolute(rel_path)
        if full_path is None:
            return None

        scanned = await asyncio.to_thread(self._scan_directory, full_path)
        if scanned is None:
            return None

        subdirs, image_paths = scanned
        images = [self._image_item(path) for path in image_paths]
        results = await self._aggregate_all(subdirs)
        subcategories = [
            self._category_item(path, result) for path, result in zip(subdirs, results)
        ]

        return DirectoryContent(
            name=decoded[-1],
            subcategories=subcategories,
            images=images,
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _absolute(self, rel_path: str) -> str | None:
        """Image root joined with ``rel_path``; None if it escapes the root."""
        full_path = os.path.normpath(self._root + os.sep + rel_path)
        try:
            if os.path.commonpath([self._root, full_path]) != self._root:
                return None
        except ValueError:  # different drives
            return None
        return full_path

    def _scan_root(self) -> tuple[list[str], list[str]] | None:
        """Children of the image root; None if it is missing or unreadable."""
        if not os.path.exists(self._root):
            return None
        try:
            return self._scan_children(self._root)
        except OSError as exc:
            logger.warning("Error reading image root %s: %s", self._root, exc)
            return None

    def _scan_directory(self, full_path: str) -> tuple[list[str], list[str]] | None:
        """Children of a requested directory; None if it is not one."""
        try:
            if not os.path.isdir(full_path):
                return None
            return self._scan_children(full_path)
        except OSError as exc:
            logger.debug("Cannot resolve %s: %s", full_path, exc)
            return None

    def _scan_children(self, directory: str) -> tuple[list[str], list[str]]:
        """Immediate subdirectory and image paths, in listing order.

        Runs in a worker thread. Raises OSError if ``directory`` is unlistable.
        """
        subdirs: list[str] = []
        images: list[str] = []
        for name in list_entries(directory, sort=self._sort):
            entry_path = os.path.join(directory, name)
            kind = classify(entry_path)
            if kind is EntryKind.DIRECTORY:
                subdirs.append(entry_path)
            elif kind is EntryKind.IMAGE:
                images.append(entry_path)
        return subdirs, images

    async def _aggregate_all(self, directories: list[str]) -> list[Aggregate]:
        """Aggregate sibling subtrees concurrently, results in input order."""
        return await asyncio.gather(
            *(
                asyncio.to_thread(aggregate, path, self._root, self._prefix, self._sort)
                for path in directories
            )
        )

    def _category_item(self, path: str, result: Aggregate) -> CategoryItem:
        name = os.path.basename(path)
        return CategoryItem(name=name, slug=name, count=result.count, preview=result.preview)

    def _image_item(self, path: str) -> ImageItem:
        return ImageItem(
            name=strip_image_extension(os.path.basename(path)),
            src=to_servable_path(path, self._root, self._prefix),
        )
