"""
Media URL extraction for TikSave.

Provider responses have no fixed schema. The media URL is located by an
ordered list of field extractors, then by a text scan of every key and
string value, then by a depth-bounded walk over every string value.
"""

import logging
import re
from typing import Any, Callable, Iterator, List, Optional, Sequence

from tiksave.core.config import settings
from tiksave.core.exceptions import NoMediaUrlFoundError
from tiksave.models.media import ABSOLUTE_URL_PATTERN, JSONValue


logger = logging.getLogger(__name__)


Extractor = Callable[[JSONValue], Optional[str]]

_EXTENSIONS = "|".join(settings.media_extensions)

# First media URL inside arbitrary text
MEDIA_URL_IN_TEXT = re.compile(rf'https?://[^\s",]+\.(?:{_EXTENSIONS})', re.IGNORECASE)

# A whole string value that is a media URL
MEDIA_URL_VALUE = re.compile(
    rf'^https?://\S+?\.(?:{_EXTENSIONS})(?:[?#]\S*)?$', re.IGNORECASE
)


def _as_url(value: Any) -> Optional[str]:
    """Return value when it is a non-empty absolute URL string."""
    if isinstance(value, str):
        value = value.strip()
        if value and ABSOLUTE_URL_PATTERN.match(value):
            return value
    return None


def field(*path: str) -> Extractor:
    """
    Build an extractor reading the URL at a fixed key path.

    Intermediate values that are not objects end the lookup.
    """
    def extract(document: JSONValue) -> Optional[str]:
        value = document
        for key in path:
            if not isinstance(value, dict):
                return None
            value = value.get(key)
        return _as_url(value)

    extract.__name__ = "field_" + "_".join(path)
    return extract


# Ordered by how commonly providers use each shape
FIELD_EXTRACTORS: List[Extractor] = [
    field("video"),
    field("data", "play"),
    field("downloadUrl"),
    field("url"),
    field("result", "video"),
    field("play"),
    field("videoUrl"),
]


def prune(document: JSONValue, max_depth: int = settings.max_search_depth) -> JSONValue:
    """
    Copy the document, dropping everything nested deeper than max_depth.

    Top-level fields sit at depth 1. Containers below the limit become None.
    """
    def walk(value: Any, depth: int) -> Any:
        if isinstance(value, dict):
            if depth > max_depth:
                return None
            return {str(key): walk(item, depth + 1) for key, item in value.items()}
        if isinstance(value, (list, tuple)):
            if depth > max_depth:
                return None
            return [walk(item, depth + 1) for item in value]
        return value

    return walk(document, 1)


def _strings(value: Any) -> Iterator[str]:
    """Yield every key and string value in serialization order."""
    if isinstance(value, str):
        yield value
    elif isinstance(value, dict):
        for key, item in value.items():
            yield key
            yield from _strings(item)
    elif isinstance(value, (list, tuple)):
        for item in value:
            yield from _strings(item)


def scan_text(document: JSONValue, max_depth: int = settings.max_search_depth) -> Optional[str]:
    """Find the first media URL substring among the document's keys and strings."""
    for text in _strings(prune(document, max_depth)):
        match = MEDIA_URL_IN_TEXT.search(text)
        if match:
            return match.group(0)
    return None


def search_nested(document: JSONValue, max_depth: int = settings.max_search_depth) -> Optional[str]:
    """
    Depth-bounded search for the first string value that is a media URL.

    Objects are visited in key order and arrays in index order, so the
    result is stable for a given document. Strings nested deeper than
    max_depth are never examined, which also bounds cyclic structures.
    """
    def visit(container: Any, depth: int) -> Optional[str]:
        if depth > max_depth:
            return None

        if isinstance(container, dict):
            values = container.values()
        elif isinstance(container, (list, tuple)):
            values = container
        else:
            return None

        for value in values:
            if isinstance(value, str):
                candidate = value.strip()
                if MEDIA_URL_VALUE.match(candidate):
                    return candidate
            elif isinstance(value, (dict, list, tuple)):
                found = visit(value, depth + 1)
                if found:
                    return found
        return None

    return visit(document, 1)


def find_media_url(
    document: JSONValue,
    extractors: Sequence[Extractor] = FIELD_EXTRACTORS,
    max_depth: int = settings.max_search_depth
) -> Optional[str]:
    """Run the full extraction cascade, returning None when nothing matches."""
    for extractor in extractors:
        media_url = extractor(document)
        if media_url:
            logger.debug(f"Media URL found by {extractor.__name__}")
            return media_url

    media_url = scan_text(document, max_depth)
    if media_url:
        logger.debug("Media URL found by text scan")
        return media_url

    media_url = search_nested(document, max_depth)
    if media_url:
        logger.debug("Media URL found by nested search")
    return media_url


def extract_media_url(document: JSONValue) -> str:
    """
    Extract a playable media URL from a provider response.

    Args:
        document: Decoded provider response of any shape

    Returns:
        The media URL

    Raises:
        NoMediaUrlFoundError: If every extraction step comes up empty
    """
    media_url = find_media_url(document)
    if not media_url:
        raise NoMediaUrlFoundError()
    return media_url
