"""
Client for the metadata endpoint of a running project generation service.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

import requests

from .catalog import InitializrMetadata, load_metadata
from .interfaces import MetadataSource


logger = logging.getLogger(__name__)

DEFAULT_SERVICE_URL = "https://start.spring.io"
METADATA_MEDIA_TYPE = "application/vnd.initializr.v2.2+json"


@dataclass
class MetadataCache:
    """Shared in-memory cache of fetched metadata documents."""

    documents: Dict[str, Dict] = field(default_factory=dict)
    session: requests.Session = field(default_factory=requests.Session)


class MetadataClient(MetadataSource):
    """Fetch service metadata over HTTP."""

    def __init__(
        self,
        service_url: str = DEFAULT_SERVICE_URL,
        cache: Optional[MetadataCache] = None,
        timeout: float = 30,
    ) -> None:
        self.service_url = service_url.rstrip("/")
        self.cache = cache if cache is not None else MetadataCache()
        self.timeout = timeout

    def fetch_document(self) -> Dict:
        url = f"{self.service_url}/"
        if url in self.cache.documents:
            logger.debug("Cache hit: metadata %s", url)
            return self.cache.documents[url]

        logger.info("Fetching metadata from %s", url)
        headers = {"Accept": METADATA_MEDIA_TYPE}
        with self.cache.session.get(url, headers=headers, timeout=self.timeout) as response:
            response.raise_for_status()
            data = response.json()
        self.cache.documents[url] = data
        return data

    def fetch_metadata(self) -> InitializrMetadata:
        return load_metadata(self.fetch_document())
