"""
Document Loader — resolves JSON-LD context URLs for signing.

Known contexts are served from memory; anything else goes to a fallback
loader, by default an HTTP fetch. A loader is built once and handed to
each signing call; nothing here touches process-wide state.
"""
import asyncio
import copy
import logging
from collections.abc import Mapping
from functools import partial
from pathlib import Path
from typing import Any, Optional, Union
from urllib.parse import urlparse

import aiohttp
import orjson

from ..exceptions import DocumentLoaderError
from .base import DocumentLoader, RemoteDocument

logger = logging.getLogger("ledger.client.proofs")

DEFAULT_TIMEOUT = 10.0
_ACCEPT = "application/ld+json, application/json"


async def fetch_remote_document(
    url: str, timeout: float = DEFAULT_TIMEOUT
) -> RemoteDocument:
    """Fetch a JSON-LD document over HTTP(S).

    Raises:
        DocumentLoaderError: On an unsupported scheme, an HTTP error,
            a timeout or a non-JSON body.
    """
    if urlparse(url).scheme not in ("http", "https"):
        raise DocumentLoaderError(
            f"Unable to load document {url}: only http(s) URLs are supported."
        )
    logger.debug("Fetching remote document %s", url)
    try:
        async with aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=timeout)
        ) as session:
            async with session.get(url, headers={"Accept": _ACCEPT}) as resp:
                resp.raise_for_status()
                document = await resp.json(content_type=None)
                return {
                    "contextUrl": None,
                    "documentUrl": str(resp.url),
                    "document": document,
                }
    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as err:
        raise DocumentLoaderError(
            f"Unable to load document {url}: {err}"
        ) from err


class ContextDocumentLoader:
    """Document loader with a fixed set of local contexts.

    No context documents ship with this package. Callers that sign
    operations for a Veres One ledger supply the published v1 context
    (``VERES_ONE_CONTEXT_V1_URL``) themselves, either as parsed JSON or
    through :meth:`from_files`; otherwise it is fetched over HTTP.

    Args:
        contexts: Mapping of context URL to parsed context document.
        fallback: Loader used for URLs not in ``contexts``. Defaults to
            :func:`fetch_remote_document`.
        timeout: Timeout in seconds for the default HTTP fallback.
    """

    def __init__(
        self,
        contexts: Optional[Mapping[str, Any]] = None,
        fallback: Optional[DocumentLoader] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self._contexts = dict(contexts or {})
        if fallback is None:
            fallback = partial(fetch_remote_document, timeout=timeout)
        self._fallback = fallback

    @classmethod
    def from_files(
        cls,
        paths: Mapping[str, Union[str, Path]],
        fallback: Optional[DocumentLoader] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> "ContextDocumentLoader":
        """Build a loader from context documents stored as JSON files.

        Args:
            paths: Mapping of context URL to the file holding its document.

        Raises:
            DocumentLoaderError: If a file is missing or is not valid JSON.
        """
        contexts = {}
        for url, path in paths.items():
            try:
                contexts[url] = orjson.loads(Path(path).read_bytes())
            except (OSError, orjson.JSONDecodeError) as err:
                raise DocumentLoaderError(
                    f"Unable to load context {url} from {path}: {err}"
                ) from err
            logger.debug("Loaded context %s from %s", url, path)
        return cls(contexts, fallback=fallback, timeout=timeout)

    def __contains__(self, url: object) -> bool:
        return url in self._contexts

    async def __call__(self, url: str) -> RemoteDocument:
        if url in self._contexts:
            # copy so callers cannot alter the cached context
            return {
                "contextUrl": None,
                "documentUrl": url,
                "document": copy.deepcopy(self._contexts[url]),
            }
        return await self._fallback(url)
