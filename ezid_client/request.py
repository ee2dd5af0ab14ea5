"""Transport-agnostic request descriptors for EZID API operations.

A :class:`Request` knows the HTTP method, path and ANVL payload of one
registry operation. Executing it is the registry client's job.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from urllib.parse import quote

from ezid_client.metadata import Metadata
from ezid_client.utils import ConfigurationError


class Operation(str, Enum):
    fetch = "fetch"
    create = "create"
    mint = "mint"
    modify = "modify"
    delete = "delete"
    status = "status"


_METHODS = {
    Operation.fetch: "GET",
    Operation.create: "PUT",
    Operation.mint: "POST",
    Operation.modify: "POST",
    Operation.delete: "DELETE",
    Operation.status: "GET",
}

# Operations scoped to a single identifier, addressed as /id/{identifier}.
IDENTIFIER_OPERATIONS = frozenset({
    Operation.fetch,
    Operation.create,
    Operation.modify,
    Operation.delete,
})


def identifier_path(identifier: str) -> str:
    return f"/id/{quote(identifier, safe=':/')}"


def shoulder_path(shoulder: str) -> str:
    return f"/shoulder/{quote(shoulder, safe=':/')}"


@dataclass(frozen=True)
class Request:
    """One EZID API call: operation, path, optional metadata and query."""

    operation: Operation
    path: str
    metadata: Metadata | None = None
    params: dict[str, str] = field(default_factory=dict)

    @property
    def method(self) -> str:
        return _METHODS[self.operation]

    @property
    def idempotent(self) -> bool:
        return self.method == "GET"

    def body(self) -> bytes | None:
        """UTF-8 ANVL payload; registry-managed elements are never sent."""
        if self.metadata is None:
            return None
        return self.metadata.to_anvl(include_readonly=False).encode("utf-8")

    @classmethod
    def build(
        cls,
        operation: Operation | str,
        target: str | None = None,
        metadata: Mapping[str, Any] | None = None,
        params: Mapping[str, str] | None = None,
    ) -> Request:
        """Build the request for *operation*.

        *target* is the identifier for identifier-scoped operations and the
        shoulder for ``mint``; it is ignored for ``status``.
        """
        operation = Operation(operation)
        if operation is Operation.status:
            return cls(operation, "/status", params=dict(params or {}))

        if not target:
            kind = "shoulder" if operation is Operation.mint else "identifier"
            raise ConfigurationError(f"A {kind} is required for the {operation.value} operation.")

        if operation is Operation.mint:
            path = shoulder_path(target)
        else:
            path = identifier_path(target)

        if metadata is not None and not isinstance(metadata, Metadata):
            metadata = Metadata(metadata)
        if metadata is None and operation in (Operation.create, Operation.mint, Operation.modify):
            metadata = Metadata()

        return cls(operation, path, metadata, dict(params or {}))
