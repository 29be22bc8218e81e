"""Pydantic models for the Alertmanager webhook payload and service configuration."""

from typing import Dict, List, Optional, Tuple

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, field_validator

SUPPORTED_WEBHOOK_VERSION = "4"


class Alert(BaseModel):
    """Individual alert within an Alertmanager notification.

    Timestamps are kept as the strings Alertmanager sent; they are stored,
    not interpreted.
    """

    model_config = ConfigDict(extra="allow")

    status: str = ""
    labels: Optional[Dict[str, str]] = Field(default_factory=dict)
    annotations: Optional[Dict[str, str]] = Field(default_factory=dict)
    starts_at: str = Field(default="", alias="startsAt")
    ends_at: str = Field(default="", alias="endsAt")
    generator_url: str = Field(default="", alias="generatorURL")


class Notification(BaseModel):
    """Alertmanager webhook payload, stored as one Elasticsearch document."""

    model_config = ConfigDict(extra="allow")

    version: str = ""
    group_key: str = Field(default="", alias="groupKey")
    status: str = ""
    receiver: str = ""
    group_labels: Optional[Dict[str, str]] = Field(default_factory=dict, alias="groupLabels")
    common_labels: Optional[Dict[str, str]] = Field(default_factory=dict, alias="commonLabels")
    common_annotations: Optional[Dict[str, str]] = Field(default_factory=dict, alias="commonAnnotations")
    external_url: str = Field(default="", alias="externalURL")
    alerts: Optional[List[Alert]] = Field(default_factory=list)

    # Records when the notification was received, never taken from the caller.
    timestamp: Optional[str] = Field(default=None, alias="@timestamp")

    def to_document(self) -> bytes:
        """Encode the notification as it is sent to Elasticsearch.

        Keys missing from the received payload stay missing.
        """
        return self.model_dump_json(by_alias=True, exclude_unset=True).encode()


class ServiceConfig(BaseModel):
    """Startup configuration for the bridge."""

    addr: str = Field(
        default="localhost:9097",
        description="host:port to listen to"
    )
    es_url: str = Field(
        description="Elasticsearch HTTP URL"
    )
    es_index_name: str = Field(
        default="alertmanager",
        description="Elasticsearch index name"
    )
    # Index by month as we don't produce enough data to warrant a daily index
    es_index_date_format: str = Field(
        default="%Y.%m",
        description="strftime pattern appended to the index name"
    )
    es_type: str = Field(
        default="alert_group",
        description="Elasticsearch document type ('_type')"
    )
    timeout: float = Field(
        default=10.0,
        description="Timeout in seconds for reading requests and writing to Elasticsearch",
        gt=0,
        le=300
    )
    log_level: str = Field(
        default="INFO",
        description="Log level"
    )

    @field_validator('es_url')
    @classmethod
    def validate_es_url(cls, v: str) -> str:
        """Validate Elasticsearch URL format."""
        if not v.startswith(('http://', 'https://')):
            raise ValueError("Elasticsearch URL must start with http:// or https://")
        return v.rstrip('/')

    @field_validator('addr')
    @classmethod
    def validate_addr(cls, v: str) -> str:
        """Validate host:port format."""
        host, sep, port = v.rpartition(':')
        if not sep or not port.isdigit():
            raise ValueError("addr must be in host:port form")
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate the level is one loguru knows."""
        level = v.upper()
        try:
            logger.level(level)
        except ValueError:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def host_port(self) -> Tuple[str, int]:
        host, _, port = self.addr.rpartition(':')
        return host or "0.0.0.0", int(port)

    @classmethod
    def from_cli_args(
        cls,
        addr: str,
        es_url: str,
        es_index_name: str,
        es_index_date_format: str,
        es_type: str,
        timeout: float,
        log_level: str,
    ) -> "ServiceConfig":
        """Create ServiceConfig from CLI arguments.

        Args:
            addr: host:port to listen to
            es_url: Elasticsearch HTTP URL
            es_index_name: Elasticsearch index name
            es_index_date_format: strftime pattern for the index suffix
            es_type: Elasticsearch document type
            timeout: Request timeout in seconds
            log_level: Log level

        Returns:
            ServiceConfig instance
        """
        return cls(
            addr=addr,
            es_url=es_url,
            es_index_name=es_index_name,
            es_index_date_format=es_index_date_format,
            es_type=es_type,
            timeout=timeout,
            log_level=log_level,
        )
