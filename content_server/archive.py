"""
Content archive loader.

Reads the bundled zip archive once at startup and splits its text entries
into the recipe and documentation collections. Entries are keyed by their
path inside the archive with the category root folder stripped.
"""

from __future__ import annotations

import logging
import zipfile
import zlib
from pathlib import Path

from content_server.content_types import TEXT_EXTENSIONS, ContentCategory

_logger = logging.getLogger("content.archive")


class LoadError(Exception):
    """The content archive is missing or cannot be decompressed."""


def load_archive(archive_path: str | Path) -> dict[ContentCategory, dict[str, str]]:
    """
    Load every recognised text entry of *archive_path*.

    Returns one ``path -> text`` mapping per category, in archive order.
    A later entry with the same key replaces an earlier one. Directories,
    binary files and entries outside the category roots are skipped.

    Raises:
        LoadError: if the file does not exist or is not a readable zip.
    """
    path = Path(archive_path)
    if not path.is_file():
        raise LoadError(f"Content zip file not found: {archive_path}")

    collections: dict[ContentCategory, dict[str, str]] = {
        category: {} for category in ContentCategory
    }

    try:
        with zipfile.ZipFile(path) as archive:
            for info in archive.infolist():
                _load_entry(archive, info, collections)
    except (
        zipfile.BadZipFile,
        zipfile.LargeZipFile,
        zlib.error,
        OSError,
        EOFError,
        RuntimeError,  # encrypted entry
        NotImplementedError,  # unsupported compression method
    ) as e:
        raise LoadError(f"Cannot decompress {archive_path}: {e}") from e

    for category, documents in collections.items():
        _logger.info("Loaded %d %s", len(documents), category.collection)
    return collections


def _load_entry(
    archive: zipfile.ZipFile,
    info: zipfile.ZipInfo,
    collections: dict[ContentCategory, dict[str, str]],
) -> None:
    """Add one archive member to its collection if it qualifies."""
    name = info.filename
    if info.is_dir() or not name.endswith(TEXT_EXTENSIONS):
        _logger.debug("Skipping %s", name)
        return

    category = _category_for(name)
    if category is None:
        _logger.debug("Skipping %s (outside content roots)", name)
        return

    raw = archive.read(info)
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        _logger.warning("%s is not valid UTF-8; undecodable bytes replaced", name)
        text = raw.decode("utf-8", errors="replace")

    collections[category][name[len(category.root_prefix):]] = text


def _category_for(name: str) -> ContentCategory | None:
    for category in ContentCategory:
        if name.startswith(category.root_prefix):
            return category
    return None
