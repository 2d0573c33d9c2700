"""
Composition loading entry points.

``load_composition_async`` and ``composition_from_json`` are strict: they
return a ``Composition`` or raise a ``LottieError``. ``load_composition_sync``
is best-effort and never raises for a bad document, it returns a
``LoadResult`` with a diagnostic instead.
"""
import asyncio
import json
import logging
import os
from typing import NamedTuple, Optional

import requests

from ..config import settings
from ..errors import CompositionLoadError, ErrorKind, LottieError
from ..model.composition import Composition
from .builder import CompositionBuilder

logger = logging.getLogger(__name__)


class LoadResult(NamedTuple):
    composition: Optional[Composition]
    diagnostic: Optional[str] = None

    @property
    def ok(self):
        return self.composition is not None


def _read_source(source):
    """Reads raw bytes from a path, a bytes object or a binary/text stream."""
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    if isinstance(source, (str, os.PathLike)):
        try:
            with open(source, "rb") as fp:
                return fp.read()
        except FileNotFoundError as e:
            raise CompositionLoadError("Unable to find file %s" % source, ErrorKind.NOT_FOUND) from e
        except OSError as e:
            raise CompositionLoadError("Unable to read %s: %s" % (source, e), ErrorKind.IO) from e
    if hasattr(source, "read"):
        try:
            data = source.read()
        except (OSError, ValueError) as e:
            raise CompositionLoadError("Unable to read stream: %s" % e, ErrorKind.IO) from e
        if isinstance(data, str):
            data = data.encode("utf-8")
        return data
    raise CompositionLoadError("Unsupported source %r" % (source,), ErrorKind.IO)


def _decode(data):
    try:
        return json.loads(data)
    except (UnicodeDecodeError, ValueError) as e:
        raise CompositionLoadError("Unable to decode json: %s" % e, ErrorKind.DECODE) from e


def composition_from_json(document, scale=None, cancellation=None):
    """
    Builds a composition from an already decoded document.

    Raises ``CompositionParseError`` for malformed documents and
    ``LoadCancelledError`` if ``cancellation`` fires between phases.
    """
    if cancellation is not None:
        cancellation.raise_if_cancelled()
    return CompositionBuilder(scale, cancellation).build(document)


def _load(source, scale, cancellation):
    if cancellation is not None:
        cancellation.raise_if_cancelled()
    document = _decode(_read_source(source))
    return composition_from_json(document, scale, cancellation)


async def load_composition_async(source, scale=None, cancellation=None):
    """
    Reads, decodes and builds a composition on a worker thread.

    ``source`` is a file path, a bytes object or a readable stream. Errors
    propagate as ``LottieError`` subclasses.
    """
    if isinstance(source, (str, os.PathLike)) and not os.path.exists(source):
        raise CompositionLoadError("Unable to find file %s" % source, ErrorKind.NOT_FOUND)
    return await asyncio.to_thread(_load, source, scale, cancellation)


def load_composition_sync(source, scale=None):
    """Best-effort load: any failure is logged and reported as a diagnostic."""
    try:
        composition = _load(source, scale, None)
    except LottieError as e:
        logger.warning("Unable to load composition", exc_info=True)
        return LoadResult(None, "%s: %s" % (e.kind.value, e))
    except Exception as e:
        logger.exception("Unexpected error while loading composition")
        return LoadResult(None, "%s: %s" % (ErrorKind.PARSE.value, e))
    return LoadResult(composition)


def fetch_composition(url, scale=None, download_func=None, timeout=None):
    """
    Downloads and builds a composition.

    ``download_func`` may be given as ``callable(url) -> bytes``, otherwise
    ``requests.get`` is used.
    """
    timeout = timeout if timeout is not None else settings.fetch_timeout
    try:
        if download_func is not None:
            data = download_func(url)
            if data is None:
                raise CompositionLoadError("Download function returned no data for %s" % url, ErrorKind.IO)
        else:
            response = requests.get(url, timeout=timeout)
            if response.status_code == 404:
                raise CompositionLoadError("Unable to find %s" % url, ErrorKind.NOT_FOUND)
            response.raise_for_status()
            data = response.content
    except requests.RequestException as e:
        raise CompositionLoadError("Unable to fetch %s: %s" % (url, e), ErrorKind.IO) from e
    return composition_from_json(_decode(data), scale)
