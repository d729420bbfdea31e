"""
Filter list sources for adblock.

Builds the startup filter list from the seed fragments, an optional local
fragment file and fragments listed in the config.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from webfence.exceptions import FilterListError

from .fragments import FilterList, split_fragments

if TYPE_CHECKING:
    from webfence.config import WebfenceConfig

logger = logging.getLogger(__name__)


def read_fragment_file(path: Path) -> list[str]:
    """Read fragments from a text file.

    Args:
        path: File with one or more comma separated fragments per line.
            Lines starting with '#' or '!' are comments.

    Returns:
        Fragments in file order, blanks removed.

    Raises:
        FilterListError: If the file cannot be read or decoded.
    """
    try:
        with open(path, encoding="utf-8") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FilterListError(f"Failed to read fragment file {path}: {e}") from e

    fragments = split_fragments(content)
    logger.debug("Read %d fragments from %s", len(fragments), path)
    return fragments


def build_filter_list(config: WebfenceConfig) -> FilterList:
    """Build the filter list described by the config."""
    if config.replace_default_fragments:
        filter_list = FilterList()
    else:
        filter_list = FilterList.default()

    if config.filter_list_path:
        path = Path(config.filter_list_path).expanduser()
        if path.exists():
            filter_list = filter_list.extend(read_fragment_file(path))
        else:
            logger.warning("Fragment file not found, ignoring: %s", path)

    if config.extra_fragments:
        filter_list = filter_list.extend(
            f.strip() for f in config.extra_fragments if f.strip()
        )

    if not filter_list:
        logger.warning("Filter list is empty, no requests will be blocked")
    else:
        logger.info("Filter list built: %d fragments", len(filter_list))
    return filter_list
