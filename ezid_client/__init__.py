"""
EZID client
Resource model for EZID persistent identifiers (ARKs and DOIs)
"""

__version__ = "0.1.0"

from ezid_client.client import Client, RegistryClient
from ezid_client.identifier import (
    Identifier,
    get_defaults,
    reset_defaults,
    set_defaults,
)
from ezid_client.memory import InMemoryClient
from ezid_client.metadata import Metadata, Status, StatusKind
from ezid_client.request import Operation, Request
from ezid_client.response import Response
from ezid_client.settings import EzidSettings, get_settings
from ezid_client.utils import (
    ConfigurationError,
    EzidError,
    RegistryError,
    StateError,
)

__all__ = [
    "Client",
    "RegistryClient",
    "Identifier",
    "get_defaults",
    "set_defaults",
    "reset_defaults",
    "InMemoryClient",
    "Metadata",
    "Status",
    "StatusKind",
    "Operation",
    "Request",
    "Response",
    "EzidSettings",
    "get_settings",
    "EzidError",
    "ConfigurationError",
    "RegistryError",
    "StateError",
]
