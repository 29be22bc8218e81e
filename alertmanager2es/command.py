"""alertmanager2es command - entrypoint."""

from typing import Optional

import typer
import uvicorn
from uvicorn.config import LOG_LEVELS
from loguru import logger
from pydantic import ValidationError

from alertmanager2es import version_string
from alertmanager2es.app import create_app
from alertmanager2es.log import configure_logging
from alertmanager2es.models import ServiceConfig

app = typer.Typer(help="Forward Alertmanager webhook notifications to Elasticsearch")


@app.command()
def serve(
    addr: str = typer.Option(
        "localhost:9097",
        "--addr",
        help="host:port to listen to",
    ),
    es_url: Optional[str] = typer.Option(
        None,
        "--es-url",
        help="Elasticsearch HTTP URL",
    ),
    es_index_name: str = typer.Option(
        "alertmanager",
        "--es-index-name",
        help="Elasticsearch index name",
    ),
    es_index_date_format: str = typer.Option(
        "%Y.%m",
        "--es-index-date-format",
        help="Elasticsearch index date format (strftime pattern)",
    ),
    es_type: str = typer.Option(
        "alert_group",
        "--es-type",
        help="Elasticsearch document type ('_type')",
    ),
    timeout: float = typer.Option(
        10.0,
        "--timeout",
        help="Seconds allowed for reading a webhook request body and for each Elasticsearch write",
    ),
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        help="Log level",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Print version number and exit",
    ),
):
    """Receive Alertmanager webhooks on /webhook and store them in Elasticsearch.

    Elasticsearch basic-auth credentials are read from the ES_USER and ES_PASS
    environment variables on every write.

    Examples:

      alertmanager2es --es-url http://localhost:9200

      # Daily indices instead of monthly ones
      alertmanager2es --es-url http://localhost:9200 --es-index-date-format %Y.%m.%d
    """
    if version:
        typer.echo(version_string())
        raise typer.Exit()

    if not es_url:
        typer.echo("Must specify HTTP URL for Elasticsearch", err=True)
        raise typer.Exit(code=2)

    try:
        config = ServiceConfig.from_cli_args(
            addr=addr,
            es_url=es_url,
            es_index_name=es_index_name,
            es_index_date_format=es_index_date_format,
            es_type=es_type,
            timeout=timeout,
            log_level=log_level,
        )
    except ValidationError as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(code=2)

    configure_logging(config.log_level)
    logger.info(version_string())
    logger.info(f"Listening on {config.addr}")

    host, port = config.host_port
    uvicorn.run(
        create_app(config),
        host=host,
        port=port,
        log_level=uvicorn_log_level(config.log_level),
    )


def uvicorn_log_level(level: str) -> str:
    """Map a loguru level onto the closest level uvicorn accepts."""
    level = level.lower()
    return level if level in LOG_LEVELS else "info"


def main() -> None:
    app()


if __name__ == "__main__":
    main()
