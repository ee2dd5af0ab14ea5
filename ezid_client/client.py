"""HTTP client for the EZID API.

Executes :class:`~ezid_client.request.Request` descriptors over httpx and
returns parsed :class:`~ezid_client.response.Response` objects. Registry
error responses raise :class:`~ezid_client.utils.RegistryError` and are never
retried; only idempotent GETs are retried, and only on connection failures.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import Any, Protocol

import httpx

from ezid_client.request import Operation, Request
from ezid_client.response import Response
from ezid_client.settings import get_settings

logger = logging.getLogger(__name__)

_HEADERS = {"Content-Type": "text/plain; charset=UTF-8"}


class RegistryClient(Protocol):
    """Operations an :class:`~ezid_client.identifier.Identifier` relies on."""

    def get_identifier_metadata(self, identifier: str) -> Response: ...

    def create_identifier(
        self, identifier: str, metadata: Mapping[str, Any] | None = None
    ) -> Response: ...

    def mint_identifier(
        self, shoulder: str | None = None, metadata: Mapping[str, Any] | None = None
    ) -> Response: ...

    def modify_identifier(self, identifier: str, metadata: Mapping[str, Any]) -> Response: ...

    def delete_identifier(self, identifier: str) -> Response: ...


class Client:
    """EZID API client.

    Unset arguments fall back to :func:`~ezid_client.settings.get_settings`.
    """

    def __init__(
        self,
        base_url: str | None = None,
        user: str | None = None,
        password: str | None = None,
        default_shoulder: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        retry_delay: float | None = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.base_url).rstrip("/")
        self.user = user if user is not None else settings.user
        self.password = password if password is not None else settings.password
        self.default_shoulder = default_shoulder or settings.default_shoulder
        self.timeout = timeout if timeout is not None else settings.timeout
        self.max_retries = max_retries if max_retries is not None else settings.max_retries
        self.retry_delay = retry_delay if retry_delay is not None else settings.retry_delay

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.base_url} user={self.user!r}>"

    @property
    def auth(self) -> tuple[str, str] | None:
        if not self.user:
            return None
        return (self.user, self.password)

    # -- Operations -----------------------------------------------------------

    def get_identifier_metadata(self, identifier: str) -> Response:
        return self.execute(Request.build(Operation.fetch, identifier))

    def create_identifier(
        self, identifier: str, metadata: Mapping[str, Any] | None = None
    ) -> Response:
        return self.execute(Request.build(Operation.create, identifier, metadata))

    def mint_identifier(
        self, shoulder: str | None = None, metadata: Mapping[str, Any] | None = None
    ) -> Response:
        return self.execute(Request.build(Operation.mint, shoulder or self.default_shoulder, metadata))

    def modify_identifier(self, identifier: str, metadata: Mapping[str, Any]) -> Response:
        return self.execute(Request.build(Operation.modify, identifier, metadata))

    def delete_identifier(self, identifier: str) -> Response:
        return self.execute(Request.build(Operation.delete, identifier))

    def server_status(self, *subsystems: str) -> Response:
        params = {"subsystems": ",".join(subsystems)} if subsystems else None
        return self.execute(Request.build(Operation.status, params=params))

    # -- Transport ------------------------------------------------------------

    def execute(self, request: Request) -> Response:
        """Send *request* and return the parsed response.

        Raises RegistryError on a non-success response and ConnectionError
        when the registry cannot be reached.
        """
        url = f"{self.base_url}{request.path}"
        attempts = max(self.max_retries, 1) if request.idempotent else 1
        last_exc: Exception | None = None

        logger.info("%s %s", request.method, request.path)
        for attempt in range(attempts):
            try:
                resp = httpx.request(
                    request.method,
                    url,
                    params=request.params or None,
                    content=request.body(),
                    headers=_HEADERS,
                    auth=self.auth,
                    timeout=self.timeout,
                )
            except httpx.RequestError as exc:
                last_exc = exc
                logger.warning(
                    "Request to %s failed (attempt %d/%d): %s",
                    url, attempt + 1, attempts, exc,
                )
                if attempt < attempts - 1:
                    time.sleep(self.retry_delay * (attempt + 1))
                continue

            response = Response.from_httpx(resp)
            if not response.success:
                logger.warning(
                    "%s %s returned %d: %s",
                    request.method, request.path, response.status_code, response.message,
                )
            return response.raise_for_status()

        raise ConnectionError(
            f"Failed to reach {url} after {attempts} attempts"
        ) from last_exc
