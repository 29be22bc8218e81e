"""Writing notification documents to Elasticsearch."""

from datetime import datetime
from typing import Callable, Optional, Tuple

import httpx
from loguru import logger

from alertmanager2es import version_string
from alertmanager2es.errors import TransientError
from alertmanager2es.models import ServiceConfig

CredentialProvider = Callable[[], Optional[Tuple[str, str]]]


def index_target(config: ServiceConfig, now: datetime) -> str:
    """Derive ``{index name}-{formatted time}/{document type}`` for a receipt time."""
    return f"{config.es_index_name}-{now.strftime(config.es_index_date_format)}/{config.es_type}"


def create_client(config: ServiceConfig) -> httpx.AsyncClient:
    """Build the client shared by all writes.

    Args:
        config: Service configuration

    Returns:
        httpx.AsyncClient identifying itself with the service version string
    """
    return httpx.AsyncClient(
        timeout=config.timeout,
        headers={
            "User-Agent": version_string(),
            "Content-Type": "application/json",
        },
    )


class ElasticsearchWriter:
    """POSTs one document per notification into a time-bucketed index."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        config: ServiceConfig,
        credentials: CredentialProvider,
    ):
        self.client = client
        self.config = config
        self.credentials = credentials

    def url_for(self, now: datetime) -> str:
        return f"{self.config.es_url}/{index_target(self.config, now)}"

    async def write(self, document: bytes, now: datetime) -> None:
        """Store a serialized notification.

        Args:
            document: JSON encoded notification
            now: Receipt time, selects the index

        Raises:
            TransientError: If the request fails or Elasticsearch answers with a non-2xx status
        """
        url = self.url_for(now)
        auth = self.credentials()

        try:
            response = await self.client.post(url, content=document, auth=auth)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransientError(str(e) or repr(e)) from e

        if not response.is_success:
            raise TransientError(
                f'POST to Elasticsearch on "{url}" returned HTTP {response.status_code}:  {response.text}'
            )

        logger.debug(f"Stored notification in {url}")
