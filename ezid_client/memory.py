"""In-memory registry client.

Implements the same operations as :class:`~ezid_client.client.Client`
against a dict instead of the EZID service, including the registry rules an
identifier depends on: minted ids, server-assigned timestamps, refusal to
delete identifiers that are not reserved. Requests are round-tripped through
the ANVL codec so metadata comes back exactly as the real service would
return it.
"""

from __future__ import annotations

import copy
import itertools
import logging
import threading
import time
from collections.abc import Callable, Mapping
from typing import Any

from ezid_client.metadata import Metadata, StatusKind
from ezid_client.request import Operation, Request
from ezid_client.response import Response
from ezid_client.utils import RegistryError

logger = logging.getLogger(__name__)


class InMemoryClient:
    """Thread-safe dict-backed registry client.

    Every call is appended to :attr:`calls` as ``(operation, target)`` so
    callers can assert which registry operations were issued.
    """

    def __init__(
        self,
        owner: str = "apitest",
        clock: Callable[[], int] | None = None,
        default_shoulder: str | None = None,
    ) -> None:
        self.owner = owner
        self.default_shoulder = default_shoulder
        self.calls: list[tuple[str, str | None]] = []
        self._store: dict[str, dict[str, str]] = {}
        self._lock = threading.Lock()
        self._clock = clock or (lambda: int(time.time()))
        self._sequence = itertools.count(1)

    # -- Operations -----------------------------------------------------------

    def get_identifier_metadata(self, identifier: str) -> Response:
        Request.build(Operation.fetch, identifier)
        self.calls.append((Operation.fetch.value, identifier))
        with self._lock:
            record = self._store.get(identifier)
            if record is None:
                raise self._error("no such identifier")
            record = copy.deepcopy(record)
        return self._success(identifier, Metadata(record))

    def create_identifier(
        self, identifier: str, metadata: Mapping[str, Any] | None = None
    ) -> Response:
        request = Request.build(Operation.create, identifier, metadata)
        self.calls.append((Operation.create.value, identifier))
        with self._lock:
            if identifier in self._store:
                raise self._error("identifier already exists")
            self._store[identifier] = self._new_record(request)
        logger.debug("Created %s", identifier)
        return self._success(identifier)

    def mint_identifier(
        self, shoulder: str | None = None, metadata: Mapping[str, Any] | None = None
    ) -> Response:
        shoulder = shoulder or self.default_shoulder
        request = Request.build(Operation.mint, shoulder, metadata)
        self.calls.append((Operation.mint.value, shoulder))
        with self._lock:
            identifier = f"{shoulder}{next(self._sequence):06d}"
            self._store[identifier] = self._new_record(request)
        logger.debug("Minted %s", identifier)
        return self._success(identifier)

    def modify_identifier(self, identifier: str, metadata: Mapping[str, Any]) -> Response:
        request = Request.build(Operation.modify, identifier, metadata)
        self.calls.append((Operation.modify.value, identifier))
        changes = self._received(request)
        with self._lock:
            record = self._store.get(identifier)
            if record is None:
                raise self._error("no such identifier")
            if (
                changes.get("_status") == StatusKind.reserved.value
                and record.get("_status") != StatusKind.reserved.value
            ):
                raise self._error("identifier status change not allowed")
            record.update(changes)
            record["_updated"] = str(self._clock())
        return self._success(identifier)

    def delete_identifier(self, identifier: str) -> Response:
        Request.build(Operation.delete, identifier)
        self.calls.append((Operation.delete.value, identifier))
        with self._lock:
            record = self._store.get(identifier)
            if record is None:
                raise self._error("no such identifier")
            if record.get("_status") != StatusKind.reserved.value:
                raise self._error("identifier status does not support deletion")
            del self._store[identifier]
        return self._success(identifier)

    # -- Inspection -----------------------------------------------------------

    def exists(self, identifier: str) -> bool:
        with self._lock:
            return identifier in self._store

    def count(self) -> int:
        with self._lock:
            return len(self._store)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()
        self.calls.clear()

    # -- Helpers --------------------------------------------------------------

    @staticmethod
    def _received(request: Request) -> dict[str, str]:
        """Metadata as the registry would decode it off the wire."""
        body = request.body()
        return Metadata.parse_anvl(body.decode("utf-8")) if body else {}

    def _new_record(self, request: Request) -> dict[str, str]:
        now = str(self._clock())
        record = {"_owner": self.owner, "_created": now, "_updated": now}
        record.update(self._received(request))
        record.setdefault("_status", StatusKind.public.value)
        return record

    @staticmethod
    def _success(identifier: str, metadata: Metadata | None = None) -> Response:
        text = f"success: {identifier}"
        if metadata:
            text += "\n" + metadata.to_anvl()
        return Response(200, text)

    @staticmethod
    def _error(reason: str) -> RegistryError:
        message = f"bad request - {reason}"
        return RegistryError(message, status_code=400, status_line=f"error: {message}")
