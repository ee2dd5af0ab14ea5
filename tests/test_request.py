"""Tests for request descriptors: paths, methods, payloads, argument checks."""

import pytest

from ezid_client.metadata import Metadata
from ezid_client.request import Operation, Request
from ezid_client.utils import ConfigurationError

ARK = "ark:/99999/fk4fn19h88"


class TestPaths:
    @pytest.mark.parametrize(
        "operation, method",
        [
            (Operation.fetch, "GET"),
            (Operation.create, "PUT"),
            (Operation.modify, "POST"),
            (Operation.delete, "DELETE"),
        ],
    )
    def test_identifier_operations(self, operation, method):
        request = Request.build(operation, ARK)
        assert request.path == f"/id/{ARK}"
        assert request.method == method

    def test_mint_is_shoulder_scoped(self):
        request = Request.build(Operation.mint, "ark:/99999/fk4")
        assert request.path == "/shoulder/ark:/99999/fk4"
        assert request.method == "POST"

    def test_doi_path(self):
        request = Request.build("fetch", "doi:10.5072/FK2TEST")
        assert request.path == "/id/doi:10.5072/FK2TEST"

    def test_unsafe_characters_are_quoted(self):
        request = Request.build(Operation.fetch, "ark:/99999/fk4 a#b")
        assert request.path == "/id/ark:/99999/fk4%20a%23b"

    def test_status_path_and_params(self):
        request = Request.build(Operation.status, params={"subsystems": "noid,ldap"})
        assert request.path == "/status"
        assert request.params == {"subsystems": "noid,ldap"}
        assert request.body() is None


class TestArgumentChecks:
    @pytest.mark.parametrize("operation", ["fetch", "create", "modify", "delete"])
    def test_missing_identifier(self, operation):
        with pytest.raises(ConfigurationError, match="identifier is required"):
            Request.build(operation, None)

    def test_empty_identifier(self):
        with pytest.raises(ConfigurationError):
            Request.build(Operation.fetch, "")

    def test_missing_shoulder(self):
        with pytest.raises(ConfigurationError, match="shoulder is required"):
            Request.build(Operation.mint, None, {"_profile": "erc"})

    def test_unknown_operation(self):
        with pytest.raises(ValueError):
            Request.build("rename", ARK)


class TestPayload:
    def test_fetch_and_delete_have_no_body(self):
        assert Request.build(Operation.fetch, ARK).body() is None
        assert Request.build(Operation.delete, ARK).body() is None

    def test_mapping_is_wrapped_in_metadata(self):
        request = Request.build(Operation.create, ARK, {"target": "http://example.org"})
        assert isinstance(request.metadata, Metadata)
        assert request.body() == b"_target: http://example.org"

    def test_write_without_metadata_sends_empty_body(self):
        assert Request.build(Operation.modify, ARK).body() == b""

    def test_body_excludes_readonly_elements(self):
        metadata = Metadata({"_created": "1416507086", "_owner": "apitest", "_status": "public"})
        request = Request.build(Operation.modify, ARK, metadata)
        assert request.body() == b"_status: public"

    def test_body_is_utf8(self):
        request = Request.build(Operation.create, ARK, {"dc.creator": "Gödel, Kurt"})
        assert request.body() == "dc.creator: Gödel, Kurt".encode("utf-8")

    def test_only_reads_are_idempotent(self):
        assert Request.build(Operation.fetch, ARK).idempotent is True
        assert Request.build(Operation.status).idempotent is True
        assert Request.build(Operation.create, ARK).idempotent is False
        assert Request.build(Operation.delete, ARK).idempotent is False
