"""Data structures for Hurl to Bruno conversion.

This module defines dataclasses used for parsed Hurl requests, translated
values, collection generation results and collection drift reports.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class HurlCapture:
    """Capture of a response value into a run-scoped variable.

    Attributes:
        name: Variable name the value is stored under
        jsonpath: JSONPath expression locating the value in the response body
    """

    name: str
    jsonpath: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "jsonpath": self.jsonpath,
        }


@dataclass
class HurlRequest:
    """One HTTP call extracted from a Hurl file.

    Attributes:
        comment: Label from the preceding comment line (optional)
        method: HTTP method (GET, POST, PUT, DELETE, PATCH)
        url: Request URL, may contain {{var}} placeholders
        headers: Header name -> value, in source order
        body: Raw JSON body text (optional)
        status_code: Expected HTTP status (optional)
        captures: Captures in source order
        asserts: Raw assertion lines in source order
    """

    comment: Optional[str] = None
    method: Optional[str] = None
    url: Optional[str] = None
    headers: dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None
    status_code: Optional[int] = None
    captures: list[HurlCapture] = field(default_factory=list)
    asserts: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "comment": self.comment,
            "method": self.method,
            "url": self.url,
            "headers": dict(self.headers),
            "body": self.body,
            "status_code": self.status_code,
            "captures": [c.to_dict() for c in self.captures],
            "asserts": list(self.asserts),
        }


@dataclass
class TranslatedValue:
    """A Hurl value rewritten as a JavaScript expression.

    Attributes:
        expr: JavaScript expression text
        is_null: True when the source value was the null literal
    """

    expr: str
    is_null: bool = False


@dataclass
class GenerationResult:
    """Result of writing a Bruno collection.

    Attributes:
        output_dir: Root directory of the collection
        folders: Folder name -> number of request files written
        files_written: Total number of files in the collection tree
    """

    output_dir: str
    folders: dict[str, int] = field(default_factory=dict)
    files_written: int = 0

    @property
    def requests_written(self) -> int:
        """Number of request files across all folders."""
        return sum(self.folders.values())

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "output_dir": self.output_dir,
            "folders": dict(self.folders),
            "files_written": self.files_written,
            "requests_written": self.requests_written,
        }


DIFF_KINDS = ("missing", "extra", "changed")


@dataclass
class DiffEntry:
    """A single file that differs between two collection trees.

    Attributes:
        path: Path relative to the collection root, '/'-separated
        kind: "missing" (not committed), "extra" (not generated) or "changed"
    """

    path: str
    kind: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"path": self.path, "kind": self.kind}


@dataclass
class CollectionDiff:
    """Structured difference between a regenerated and a committed collection.

    Attributes:
        entries: Differing files sorted by path
        summary: Count summary {"missing": n, "extra": n, "changed": n}
        has_changes: True if any difference was found
    """

    entries: list[DiffEntry] = field(default_factory=list)
    summary: dict[str, int] = field(default_factory=dict)
    has_changes: bool = False

    def __post_init__(self) -> None:
        """Calculate summary and has_changes after initialization."""
        self.summary = {
            kind: sum(1 for e in self.entries if e.kind == kind) for kind in DIFF_KINDS
        }
        self.has_changes = len(self.entries) > 0

    @property
    def missing(self) -> list[str]:
        return [e.path for e in self.entries if e.kind == "missing"]

    @property
    def extra(self) -> list[str]:
        return [e.path for e in self.entries if e.kind == "extra"]

    @property
    def changed(self) -> list[str]:
        return [e.path for e in self.entries if e.kind == "changed"]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "entries": [e.to_dict() for e in self.entries],
            "summary": self.summary,
            "has_changes": self.has_changes,
        }
