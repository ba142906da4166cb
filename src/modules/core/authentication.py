"""Static API-key authentication backend for Django REST Framework.

Accepted credentials
--------------------
* ``Authorization: Bearer <key>``
* ``Authorization: ApiKey <key>``
* ``X-API-Key: <key>`` (only consulted when ``Authorization`` is absent)

Security decisions
------------------
* **Fail Closed**: a missing key, an unconfigured server key or a
  mismatch all return 401.
* The key is compared with ``hmac.compare_digest`` (constant time).
* The server key comes from ``AppConfig`` injected at construction; it is
  never read from the environment here.
"""

from __future__ import annotations

import hmac
from typing import Optional, Tuple

import structlog
from django.conf import settings
from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed, NotAuthenticated

from modules.core.conf import AppConfig

logger = structlog.get_logger(__name__)

_SCHEMES = {"bearer", "apikey"}


class ApiKeyUser:
    """Principal attached to requests authenticated with the API key.

    There is no local ``User`` row: the API key is the only identity.
    """

    is_authenticated = True
    is_active = True
    is_anonymous = False
    pk = None
    username = "api-key"

    def __str__(self) -> str:  # pragma: no cover
        return self.username


class ApiKeyAuthentication(BaseAuthentication):
    """DRF authentication class that validates the static API key."""

    keyword = "Bearer"

    def __init__(self, app_config: Optional[AppConfig] = None) -> None:
        self._config = app_config or settings.APP_CONFIG

    # ------------------------------------------------------------------
    # Public API (DRF contract)
    # ------------------------------------------------------------------

    def authenticate(self, request) -> Tuple[ApiKeyUser, str]:
        """Return ``(ApiKeyUser, key)`` or raise a 401 exception."""
        token = self._extract_token(request)
        if not token:
            raise NotAuthenticated("API key is required.")

        if not self._config.api_key_configured:
            logger.error("api_key.not_configured")
            raise AuthenticationFailed("API key not configured on server.")

        if not hmac.compare_digest(token.encode(), self._config.api_key.encode()):
            logger.warning("api_key.invalid", path=request.path)
            raise AuthenticationFailed("Invalid API key.")

        return (ApiKeyUser(), token)

    def authenticate_header(self, request) -> str:
        """Value for the ``WWW-Authenticate`` response header on 401."""
        return f'{self.keyword} realm="api"'

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _extract_token(request) -> Optional[str]:
        header = request.META.get("HTTP_AUTHORIZATION", "")
        if not header:
            return request.META.get("HTTP_X_API_KEY") or None

        parts = header.split()
        if len(parts) == 2 and parts[0].lower() in _SCHEMES:
            return parts[1]
        return None
