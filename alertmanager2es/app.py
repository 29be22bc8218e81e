"""FastAPI application receiving Alertmanager webhooks."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
from loguru import logger

from alertmanager2es import APPLICATION, __version__, version_string
from alertmanager2es.credentials import EnvironmentCredentials
from alertmanager2es.elasticsearch import CredentialProvider, ElasticsearchWriter, create_client
from alertmanager2es.handler import NotificationHandler
from alertmanager2es.metrics import NotificationMetrics
from alertmanager2es.models import ServiceConfig


def create_app(
    config: ServiceConfig,
    metrics: Optional[NotificationMetrics] = None,
    credentials: Optional[CredentialProvider] = None,
) -> FastAPI:
    """Build the bridge application.

    Args:
        config: Service configuration
        metrics: Metrics to record into, a fresh set by default
        credentials: Elasticsearch credential lookup, ES_USER/ES_PASS by default

    Returns:
        FastAPI application
    """
    metrics = metrics or NotificationMetrics()
    credentials = credentials or EnvironmentCredentials()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Own the Elasticsearch client for the lifetime of the application."""
        logger.info("Application startup")
        async with create_client(config) as client:
            writer = ElasticsearchWriter(client, config, credentials)
            app.state.handler = NotificationHandler(writer, metrics, read_timeout=config.timeout)
            logger.info(f"Writing notifications to {config.es_url}")
            yield
        logger.info("Application shutdown")

    app = FastAPI(title=APPLICATION, version=__version__, lifespan=lifespan)
    app.state.config = config
    app.state.metrics = metrics

    @app.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        """Identify the service."""
        return version_string()

    @app.get("/metrics")
    async def metrics_endpoint() -> Response:
        """Prometheus metrics."""
        payload, content_type = metrics.render()
        return Response(content=payload, media_type=content_type)

    @app.post("/webhook")
    async def webhook(request: Request) -> Response:
        """Receive an Alertmanager webhook notification and store it in Elasticsearch."""
        handler: NotificationHandler = request.app.state.handler
        return await handler.handle(request)

    return app
