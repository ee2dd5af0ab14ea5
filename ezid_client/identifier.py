"""EZID identifier resource.

An :class:`Identifier` represents one EZID identifier and its lifecycle::

    unsaved --save--> persisted (reserved | public | unavailable) --delete--> deleted

An identifier is persisted once the registry has confirmed it, i.e. it has an
``id`` and a server-assigned ``_created`` timestamp. Every ``save`` is
followed by a reload, so local metadata always reflects what the registry
stored. ``deleted`` is terminal.

Identifiers are not thread-safe; share one across threads only with external
serialization.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from ezid_client.client import Client, RegistryClient
from ezid_client.metadata import (
    PUBLIC,
    UNAVAILABLE,
    Metadata,
    Status,
    StatusKind,
)
from ezid_client.utils import StateError

logger = logging.getLogger(__name__)

# Attributes to display in repr
INSPECT_ATTRS = ("id", "status", "target", "created")


# ═══════════════════════════════════════════════════════════════════
# PROCESS-WIDE DEFAULTS
# ═══════════════════════════════════════════════════════════════════

_defaults: dict[str, Any] = {}
_defaults_lock = threading.Lock()


def get_defaults() -> dict[str, Any]:
    """Return a copy of the process-wide metadata defaults"""
    with _defaults_lock:
        return dict(_defaults)


def set_defaults(defaults: Mapping[str, Any]) -> None:
    """Replace the process-wide metadata defaults"""
    global _defaults
    with _defaults_lock:
        _defaults = dict(defaults)


def reset_defaults() -> None:
    """Clear the process-wide metadata defaults"""
    set_defaults({})


def _display(value: Any) -> str:
    return "" if value is None else str(value)


# ═══════════════════════════════════════════════════════════════════
# IDENTIFIER
# ═══════════════════════════════════════════════════════════════════


class Identifier:
    """Client-side model of one EZID identifier.

    Metadata is layered at construction: *defaults* (the process-wide
    defaults when not given), then the *metadata* seed mapping, then any
    keyword *fields* such as ``target=`` or ``profile=``.
    """

    def __init__(
        self,
        id: str | None = None,
        shoulder: str | None = None,
        metadata: Mapping[str, Any] | str | None = None,
        client: RegistryClient | None = None,
        defaults: Mapping[str, Any] | None = None,
        **fields: Any,
    ) -> None:
        self.client = client if client is not None else Client()
        self.shoulder = shoulder
        self._id = id
        self._deleted = False
        self.metadata = Metadata().merge(
            get_defaults() if defaults is None else defaults,
            Metadata(metadata),
        )
        self.update_metadata(fields)

    # -- Class-level operations -----------------------------------------------

    @classmethod
    def create(cls, **attrs: Any) -> Identifier:
        """Create (with ``id``) or mint (with ``shoulder``) a new identifier."""
        return cls(**attrs).save()

    @classmethod
    def find(cls, id: str, client: RegistryClient | None = None) -> Identifier:
        """Load an existing identifier; raises RegistryError if EZID has none."""
        return cls(id=id, client=client).reload()

    # -- Representation -------------------------------------------------------

    @property
    def id(self) -> str | None:
        return self._id

    def __repr__(self) -> str:
        if self.is_deleted:
            attrs = f'id="{self.id}" DELETED'
        else:
            attrs = " ".join(
                f'{attr}="{_display(self._inspect(attr))}"' for attr in INSPECT_ATTRS
            )
        return f"<{type(self).__name__} {attrs}>"

    def __str__(self) -> str:
        return self.id or ""

    def _inspect(self, attr: str) -> Any:
        # raw status, so unrecognized terms still show
        if attr == "status":
            return self.get_field("_status")
        return getattr(self, attr)

    # -- Persistence ----------------------------------------------------------

    def save(self) -> Identifier:
        """Persist the identifier and its metadata, then reload from EZID.

        Modifies a persisted identifier; otherwise creates it (when it has an
        id) or mints one under its shoulder.
        """
        if self.is_deleted:
            raise StateError("Cannot save a deleted identifier.")
        if self.is_persisted:
            self._modify()
        else:
            self._create_or_mint()
        return self.reload()

    def update_metadata(self, data: Mapping[str, Any] | None = None, **fields: Any) -> Identifier:
        """Set metadata fields locally (no network call)."""
        for name, value in {**(data or {}), **fields}.items():
            self.set_field(name, value)
        return self

    def update(self, data: Mapping[str, Any] | None = None, **fields: Any) -> Identifier:
        """Set metadata fields and save."""
        self.update_metadata(data, **fields)
        return self.save()

    def reload(self) -> Identifier:
        """Replace local metadata with EZID's copy (local changes are lost)."""
        self._check_not_deleted("reload")
        response = self.client.get_identifier_metadata(self.id)
        self.metadata = Metadata(response.metadata)
        return self

    def reset(self) -> Identifier:
        """Empty the local metadata (no network call)."""
        self._check_not_deleted("reset")
        self.metadata.clear()
        return self

    def delete(self) -> Identifier:
        """Delete the identifier from EZID; only persisted, reserved ones qualify."""
        if not self.is_deletable:
            raise StateError(f"Only persisted, reserved identifiers may be deleted: {self!r}.")
        self.client.delete_identifier(self.id)
        self._deleted = True
        self.metadata.clear()
        logger.info("Deleted identifier %s", self.id)
        return self

    def _modify(self) -> None:
        self.client.modify_identifier(self.id, self.metadata)

    def _create_or_mint(self) -> None:
        if self.id:
            self._create()
        else:
            self._mint()

    def _create(self) -> None:
        self.client.create_identifier(self.id, self.metadata)
        logger.info("Created identifier %s", self.id)

    def _mint(self) -> None:
        response = self.client.mint_identifier(self.shoulder, self.metadata)
        self._id = response.id
        logger.info("Minted identifier %s", self.id)

    # -- State ----------------------------------------------------------------

    @property
    def is_deleted(self) -> bool:
        return self._deleted

    @property
    def is_persisted(self) -> bool:
        if self.is_deleted:
            return False
        return self.id is not None and bool(self.get_field("_created"))

    @property
    def is_reserved(self) -> bool:
        return self._status_kind is StatusKind.reserved

    @property
    def is_public(self) -> bool:
        return self._status_kind is StatusKind.public

    @property
    def is_unavailable(self) -> bool:
        return self._status_kind is StatusKind.unavailable

    @property
    def is_deletable(self) -> bool:
        return self.is_persisted and self.is_reserved

    @property
    def _status_kind(self) -> StatusKind | None:
        status = self.status
        return status.kind if status else None

    def make_unavailable(self, reason: str | None = None) -> Status:
        """Mark the identifier unavailable, optionally with a reason."""
        if self.is_persisted and self.is_reserved:
            raise StateError("Cannot make a reserved identifier unavailable.")
        status = UNAVAILABLE if reason is None else Status(StatusKind.unavailable, reason)
        self.status = status
        return status

    def make_public(self) -> Status:
        self.status = PUBLIC
        return PUBLIC

    # -- Metadata fields ------------------------------------------------------

    def get_field(self, name: str) -> str | None:
        return self.metadata.get_field(name)

    def set_field(self, name: str, value: Any) -> None:
        self._check_not_deleted("modify metadata of")
        self.metadata.set_field(name, value)

    @property
    def status(self) -> Status | None:
        return self.metadata.status

    @status.setter
    def status(self, value: Status | str) -> None:
        self.set_field("_status", value)

    @property
    def target(self) -> str | None:
        return self.get_field("_target")

    @target.setter
    def target(self, value: str) -> None:
        self.set_field("_target", value)

    @property
    def profile(self) -> str | None:
        return self.get_field("_profile")

    @profile.setter
    def profile(self, value: str) -> None:
        self.set_field("_profile", value)

    @property
    def export(self) -> str | None:
        return self.get_field("_export")

    @export.setter
    def export(self, value: str) -> None:
        self.set_field("_export", value)

    @property
    def owner(self) -> str | None:
        return self.get_field("_owner")

    @property
    def created(self) -> datetime | None:
        return self.metadata.created

    @property
    def updated(self) -> datetime | None:
        return self.metadata.updated

    def _check_not_deleted(self, action: str) -> None:
        if self.is_deleted:
            raise StateError(f"Cannot {action} a deleted identifier.")
