"""Elasticsearch credentials looked up at write time."""

import os
from typing import Optional, Tuple


class EnvironmentCredentials:
    """Read basic-auth credentials from the environment on every call.

    Nothing is cached, so rotating ``ES_USER``/``ES_PASS`` takes effect
    without restarting the service.
    """

    def __init__(self, user_var: str = "ES_USER", password_var: str = "ES_PASS"):
        self.user_var = user_var
        self.password_var = password_var

    def __call__(self) -> Optional[Tuple[str, str]]:
        """Return ``(user, password)`` when both are set, None otherwise."""
        user = os.getenv(self.user_var, "")
        password = os.getenv(self.password_var, "")
        if user and password:
            return user, password
        return None
