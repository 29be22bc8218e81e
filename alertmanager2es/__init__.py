"""alertmanager2es - forward Alertmanager webhook notifications to Elasticsearch."""

import platform

APPLICATION = "alertmanager2es"

__version__ = "0.1.0"


def version_string() -> str:
    """Identify the service, e.g. ``alertmanager2es 0.1.0 (python3.12.1)``."""
    return f"{APPLICATION} {__version__} (python{platform.python_version()})"
