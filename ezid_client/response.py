"""Parsing of EZID API responses.

Every EZID response body starts with a status line, ``success: <detail>`` or
``error: <reason>``, optionally followed by ANVL metadata lines.
"""

from __future__ import annotations

import httpx

from ezid_client.metadata import Metadata
from ezid_client.utils import RegistryError

SUCCESS = "success"
ERROR = "error"


class Response:
    """Parsed EZID response."""

    def __init__(self, status_code: int, text: str) -> None:
        self.status_code = status_code
        self.text = text
        status_line, _, self.content = text.partition("\n")
        self.status_line = status_line.strip()

        outcome, sep, detail = self.status_line.partition(":")
        if sep and outcome.strip() in (SUCCESS, ERROR):
            self.outcome = outcome.strip()
            self.message = detail.strip()
        else:
            self.outcome = ""
            self.message = self.status_line

    @classmethod
    def from_httpx(cls, resp: httpx.Response) -> Response:
        return cls(resp.status_code, resp.text)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} [{self.status_code}] {self.status_line!r}>"

    @property
    def success(self) -> bool:
        return 200 <= self.status_code < 300 and self.outcome == SUCCESS

    def raise_for_status(self) -> Response:
        if not self.success:
            raise RegistryError(
                self.message or self.status_line,
                status_code=self.status_code,
                status_line=self.status_line,
            )
        return self

    @property
    def id(self) -> str | None:
        """Identifier named on a success line (``success: <id> | <shadow>``)."""
        if not self.success:
            return None
        return self.message.partition("|")[0].strip() or None

    @property
    def shadow_ark(self) -> str | None:
        if not self.success:
            return None
        return self.message.partition("|")[2].strip() or None

    @property
    def metadata(self) -> Metadata:
        return Metadata.from_anvl(self.content)
