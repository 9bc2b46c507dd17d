"""Parser for Hurl API test files.

This module reads the subset of the Hurl format used by the API test suite
(request line, headers, JSON body, expected status, [Captures] and [Asserts]
sections) and turns each request block into a HurlRequest.

The parser is a single-pass line classifier. It has no reject outcome:
lines that don't fit the current state are ignored.
"""

import re
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from hurl2bruno.core.hurl_data import HurlCapture, HurlRequest

# Supported HTTP methods for request lines
HTTP_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH")

METHOD_PATTERN = re.compile(r"^(" + "|".join(HTTP_METHODS) + r")\s+(.+)$")
HEADER_PATTERN = re.compile(r"^([A-Za-z][\w-]*)\s*:\s*(.+)$", re.ASCII)
STATUS_PATTERN = re.compile(r"^HTTP\s+([0-9]+)$")
CAPTURE_PATTERN = re.compile(r'^(\w+)\s*:\s*jsonpath\s+"(.+)"$', re.ASCII)
COMMENT_PREFIX = re.compile(r"^#\s*")

ASSERTS_SECTION = "[Asserts]"
CAPTURES_SECTION = "[Captures]"


class ParserState(Enum):
    """Line classifier states."""

    IDLE = "idle"
    HEADERS = "headers"
    BODY = "body"
    RESPONSE = "response"
    ASSERTS = "asserts"
    CAPTURES = "captures"


class BraceScanner:
    """Collect the lines of a JSON body until its braces balance.

    Depth is a plain tally of '{' and '}' on each trimmed line, so braces
    inside string values are counted too.
    """

    def __init__(self, first_line: str) -> None:
        self.lines = [first_line]
        self.depth = first_line.strip().count("{") - first_line.strip().count("}")

    def consume(self, line: str) -> bool:
        """Add a line to the body.

        Args:
            line: Raw body line, kept verbatim

        Returns:
            True while the body is still open
        """
        self.lines.append(line)
        trimmed = line.strip()
        self.depth += trimmed.count("{") - trimmed.count("}")
        return self.depth != 0

    def keep_blank(self, line: str) -> None:
        """Keep a blank line inside the body without touching depth."""
        self.lines.append(line)

    def text(self) -> str:
        return "\n".join(self.lines)


class _ParseSession:
    """State of a single parse_text() call."""

    def __init__(self) -> None:
        self.requests: list[HurlRequest] = []
        self.current: Optional[HurlRequest] = None
        self.state = ParserState.IDLE
        self.body: Optional[BraceScanner] = None
        self._tails = {
            ParserState.CAPTURES: self._capture_line,
            ParserState.ASSERTS: self._assert_line,
        }

    def feed(self, line: str) -> None:
        trimmed = line.strip()

        if self.state is ParserState.BODY:
            self._body_line(line, trimmed)
            return

        if not trimmed:
            return

        if trimmed.startswith("#"):
            self.push_current()
            self.current = HurlRequest(comment=COMMENT_PREFIX.sub("", trimmed, count=1))
            self.state = ParserState.IDLE
            return

        method_match = METHOD_PATTERN.match(trimmed)
        if method_match:
            if self.current is not None and self.current.method:
                # Back-to-back request without a comment
                self.push_current()
                self.current = HurlRequest()
            elif self.current is None:
                self.current = HurlRequest()
            self.current.method = method_match.group(1)
            self.current.url = method_match.group(2)
            self.state = ParserState.HEADERS
            return

        if self.state is ParserState.HEADERS:
            header_match = HEADER_PATTERN.match(trimmed)
            if header_match:
                self.current.headers[header_match.group(1)] = header_match.group(2)
                return

        if trimmed == "{" and self.state in (ParserState.HEADERS, ParserState.IDLE):
            self.body = BraceScanner(line)
            self.state = ParserState.BODY
            return

        status_match = STATUS_PATTERN.match(trimmed)
        if status_match:
            if self.current is not None:
                self.current.status_code = int(status_match.group(1))
            self.state = ParserState.RESPONSE
            return

        if trimmed == ASSERTS_SECTION:
            self.state = ParserState.ASSERTS
            return
        if trimmed == CAPTURES_SECTION:
            self.state = ParserState.CAPTURES
            return

        tail = self._tails.get(self.state)
        if tail is not None and self.current is not None:
            tail(trimmed)

    def _body_line(self, line: str, trimmed: str) -> None:
        if not trimmed:
            self.body.keep_blank(line)
            return
        if not self.body.consume(line):
            self.finish_body()
            self.state = ParserState.IDLE

    def _capture_line(self, trimmed: str) -> None:
        capture_match = CAPTURE_PATTERN.match(trimmed)
        if capture_match:
            self.current.captures.append(
                HurlCapture(name=capture_match.group(1), jsonpath=capture_match.group(2))
            )

    def _assert_line(self, trimmed: str) -> None:
        self.current.asserts.append(trimmed)

    def finish_body(self) -> None:
        """Attach the collected body to the open request, if any."""
        if self.body is not None and self.current is not None:
            self.current.body = self.body.text()
        self.body = None

    def push_current(self) -> None:
        """Finalize the open request; requests without a method are dropped."""
        if self.current is None:
            return
        self.finish_body()
        if self.current.method:
            self.requests.append(self.current)
        self.current = None


class HurlParser:
    """Parse Hurl files into HurlRequest records.

    Example:
        >>> parser = HurlParser()
        >>> requests = parser.parse("api/hurl/auth.hurl")
        >>> print(requests[0].method, requests[0].url)
        'POST {{host}}/api/users'
    """

    def parse(self, hurl_path: Union[str, Path]) -> list[HurlRequest]:
        """Parse a Hurl file.

        Args:
            hurl_path: Path to the .hurl file

        Returns:
            Requests in source order

        Raises:
            FileNotFoundError: Hurl file doesn't exist
        """
        path = Path(hurl_path)
        # Undecodable bytes become U+FFFD; only "\n" separates lines
        with open(path, encoding="utf-8", errors="replace", newline="") as f:
            return self.parse_text(f.read())

    def parse_text(self, text: str) -> list[HurlRequest]:
        """Parse Hurl source text.

        Args:
            text: Full content of one Hurl file

        Returns:
            Requests in source order, excluding blocks without a request line
        """
        session = _ParseSession()
        for line in text.split("\n"):
            session.feed(line)
        session.push_current()
        return session.requests
