#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Text retrieval strategies.

The World never decides where bytes come from: it is handed a ``TextSource``
once and only calls ``fetch_text``/``resolve`` on it. Errors (``OSError``,
``requests.RequestException``) propagate unchanged.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional, Protocol
from urllib.parse import urljoin

import requests

from config import HTTP_TIMEOUT_SECONDS, TEXT_ENCODING, URL_SCHEMES

logger = logging.getLogger(__name__)


class TextSource(Protocol):
    async def fetch_text(self, path: str) -> str:
        ...

    def resolve(self, base: str, rel_path: str) -> str:
        """Locate ``rel_path`` relative to the file at ``base``."""
        ...


class FileTextSource:
    def __init__(self, encoding: str = TEXT_ENCODING):
        self.encoding = encoding

    async def fetch_text(self, path: str) -> str:
        logger.debug("Reading %s", path)
        return await asyncio.to_thread(Path(path).read_text, encoding=self.encoding)

    def resolve(self, base: str, rel_path: str) -> str:
        return str(Path(base).parent / rel_path)


class HttpTextSource:
    def __init__(self, timeout: float = HTTP_TIMEOUT_SECONDS, session: Optional[requests.Session] = None):
        self.timeout = timeout
        self.session = session

    def _get(self, url: str) -> str:
        if self.session is not None:
            response = self.session.get(url, timeout=self.timeout)
        else:
            response = requests.get(url, timeout=self.timeout)
        response.raise_for_status()
        return response.text

    async def fetch_text(self, path: str) -> str:
        logger.debug("GET %s", path)
        return await asyncio.to_thread(self._get, path)

    def resolve(self, base: str, rel_path: str) -> str:
        return urljoin(base, rel_path)


def select_text_source(location: str) -> TextSource:
    if location.startswith(URL_SCHEMES):
        return HttpTextSource()
    return FileTextSource()
