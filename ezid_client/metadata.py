"""EZID metadata container and ANVL codec.

EZID stores identifier metadata as an ordered set of textual elements and
exchanges them as ANVL ("A Name-Value Language") lines::

    _target: http://example.org/page
    _status: reserved
    erc.who: Proust, Marcel

Element names starting with ``_`` are reserved by the registry. The
container accepts the bare names (``status``, ``target``, ...) as aliases
for those, so ``metadata["status"]`` and ``metadata["_status"]`` are the same
element. Any other name is stored as given; the registry, not this module,
defines the vocabulary.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping, MutableMapping
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any

RESERVED_ELEMENTS = (
    "_owner",
    "_ownergroup",
    "_created",
    "_updated",
    "_target",
    "_profile",
    "_status",
    "_export",
    "_datacenter",
    "_crossref",
    "_shadowedby",
    "_shadows",
)

# Set by the registry; rejected if sent back on create/modify.
READONLY_ELEMENTS = frozenset({
    "_owner",
    "_ownergroup",
    "_created",
    "_updated",
    "_shadows",
    "_shadowedby",
    "_datacenter",
})

ALIASES = {name.lstrip("_"): name for name in RESERVED_ELEMENTS}

_NAME_ESCAPE_RE = re.compile(r"[%:\r\n]")
_VALUE_ESCAPE_RE = re.compile(r"[%\r\n]")
_UNESCAPE_RE = re.compile(r"%([0-9A-Fa-f]{2})")


def _escape(text: str, pattern: re.Pattern[str]) -> str:
    return pattern.sub(lambda m: "%{:02X}".format(ord(m.group())), text)


def _unescape(text: str) -> str:
    return _UNESCAPE_RE.sub(lambda m: chr(int(m.group(1), 16)), text)


# ---------------------------------------------------------------------------
# Status
# ---------------------------------------------------------------------------


class StatusKind(str, Enum):
    """Lifecycle sub-state of a persisted identifier."""
    reserved = "reserved"
    public = "public"
    unavailable = "unavailable"


@dataclass(frozen=True)
class Status:
    """Parsed value of the ``_status`` element.

    Only ``unavailable`` carries a reason, serialized as
    ``"unavailable | <reason>"``.
    """

    kind: StatusKind
    reason: str | None = None

    @classmethod
    def parse(cls, value: str) -> Status:
        value = value.strip()
        if value.startswith(StatusKind.unavailable.value):
            _, _, reason = value.partition("|")
            return cls(StatusKind.unavailable, reason.strip() or None)
        try:
            return cls(StatusKind(value))
        except ValueError:
            raise ValueError(f"Unrecognized identifier status: {value!r}") from None

    def __str__(self) -> str:
        if self.reason is not None:
            return f"{self.kind.value} | {self.reason}"
        return self.kind.value


RESERVED = Status(StatusKind.reserved)
PUBLIC = Status(StatusKind.public)
UNAVAILABLE = Status(StatusKind.unavailable)


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------


class Metadata(MutableMapping):
    """Ordered mapping of EZID metadata element names to string values."""

    def __init__(self, data: Mapping[str, Any] | str | None = None) -> None:
        self._elements: dict[str, str] = {}
        if isinstance(data, str):
            data = self.parse_anvl(data)
        if data:
            self.update(data)

    @staticmethod
    def resolve(name: str) -> str:
        """Map a reserved-element alias to its element name."""
        return ALIASES.get(name, name)

    # -- Mapping protocol -----------------------------------------------------

    def __getitem__(self, name: str) -> str:
        return self._elements[self.resolve(name)]

    def __setitem__(self, name: str, value: Any) -> None:
        self._elements[self.resolve(name)] = "" if value is None else str(value)

    def __delitem__(self, name: str) -> None:
        del self._elements[self.resolve(name)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.resolve(name) in self._elements

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._elements!r})"

    def clear(self) -> None:
        self._elements.clear()

    # -- Field access ---------------------------------------------------------

    def get_field(self, name: str) -> str | None:
        return self.get(name)

    def set_field(self, name: str, value: Any) -> None:
        self[name] = value

    def merge(
        self,
        defaults: Mapping[str, Any],
        overrides: Mapping[str, Any] | None = None,
    ) -> Metadata:
        """Apply *defaults*, then *overrides* on top of them."""
        for name, value in defaults.items():
            self[name] = value
        for name, value in (overrides or {}).items():
            self[name] = value
        return self

    # -- Reserved elements ----------------------------------------------------

    @property
    def status(self) -> Status | None:
        """Parsed ``_status``; None when unset or not a registry status term."""
        value = self.get("_status")
        if not value:
            return None
        try:
            return Status.parse(value)
        except ValueError:
            return None

    @status.setter
    def status(self, value: Status | str) -> None:
        self["_status"] = value

    @property
    def target(self) -> str | None:
        return self.get("_target")

    @target.setter
    def target(self, value: str) -> None:
        self["_target"] = value

    @property
    def profile(self) -> str | None:
        return self.get("_profile")

    @profile.setter
    def profile(self, value: str) -> None:
        self["_profile"] = value

    @property
    def export(self) -> str | None:
        return self.get("_export")

    @export.setter
    def export(self, value: str) -> None:
        self["_export"] = value

    @property
    def owner(self) -> str | None:
        return self.get("_owner")

    @property
    def created(self) -> datetime | None:
        return self._timestamp("_created")

    @property
    def updated(self) -> datetime | None:
        return self._timestamp("_updated")

    def _timestamp(self, name: str) -> datetime | None:
        value = self.get(name)
        if not value:
            return None
        return datetime.fromtimestamp(int(value), tz=timezone.utc)

    # -- ANVL -----------------------------------------------------------------

    def to_anvl(self, include_readonly: bool = True) -> str:
        """Serialize to ANVL, one ``name: value`` line per element."""
        return "\n".join(
            f"{_escape(name, _NAME_ESCAPE_RE)}: {_escape(value, _VALUE_ESCAPE_RE)}"
            for name, value in self._elements.items()
            if include_readonly or name not in READONLY_ELEMENTS
        )

    @staticmethod
    def parse_anvl(text: str) -> dict[str, str]:
        """Parse ANVL lines into an ordered dict of unescaped elements."""
        elements: dict[str, str] = {}
        for line in text.splitlines():
            if not line.strip():
                continue
            name, sep, value = line.partition(":")
            if not sep:
                raise ValueError(f"Malformed ANVL line: {line!r}")
            elements[_unescape(name.strip())] = _unescape(value.lstrip())
        return elements

    @classmethod
    def from_anvl(cls, text: str) -> Metadata:
        return cls(cls.parse_anvl(text))
