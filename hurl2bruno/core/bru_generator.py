"""Bru Generator for creating Bruno collections from Hurl files.

This module provides the BruGenerator class, which writes one Bruno folder
per Hurl file and one .bru request file per Hurl request, plus the
collection-level files shared by every folder:

- bruno.json (collection descriptor)
- collection.bru (pre-request script seeding the run id variable)
- environments/local.bru (default host)

Output is deterministic: regenerating from unchanged Hurl files gives
byte-identical files.
"""

import json
import re
import shutil
from pathlib import Path
from typing import Optional, Union

from hurl2bruno.core.hurl_data import GenerationResult, HurlRequest
from hurl2bruno.core.hurl_parser import HurlParser
from hurl2bruno.core.settings import ConverterSettings
from hurl2bruno.core.translator import assert_to_js, capture_to_js

HURL_EXTENSION = ".hurl"
BRU_EXTENSION = ".bru"
ENVIRONMENTS_DIR = "environments"

SLUG_SEPARATOR = re.compile(r"[^a-z0-9]+")

INDENT = "  "

PathLike = Union[str, Path]


def slugify(text: str) -> str:
    """Lower-case text with non-alphanumeric runs collapsed to '-'."""
    return SLUG_SEPARATOR.sub("-", text.lower()).strip("-")


def folder_name(filename: str) -> str:
    """Bruno folder for a Hurl file: "user_profile.hurl" -> "user-profile"."""
    name = Path(filename).name
    if name.endswith(HURL_EXTENSION):
        name = name[: -len(HURL_EXTENSION)]
    return name.replace("_", "-")


def last_path_segment(url: str) -> str:
    return url.split("/")[-1]


def file_name(request: HurlRequest, index: int) -> str:
    """Name of the .bru file for the request at 0-based index."""
    if request.comment:
        slug = slugify(request.comment)
    else:
        path_end = last_path_segment(request.url).split("?")[0] or "request"
        slug = slugify(f"{request.method}-{path_end}")
    return f"{index + 1:02d}-{slug}{BRU_EXTENSION}"


def display_name(request: HurlRequest) -> str:
    return request.comment or f"{request.method} {last_path_segment(request.url)}"


def _block(name: str, lines: list[str]) -> str:
    body = "\n".join(f"{INDENT}{line}" for line in lines)
    return f"{name} {{\n{body}\n}}"


def _write(path: Path, content: str) -> None:
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write(content)


class BruGenerator:
    """Generates Bruno collections from Hurl files.

    Example:
        >>> generator = BruGenerator()
        >>> result = generator.regenerate("api/hurl", "api/bruno")
        >>> print(result.files_written)
    """

    def __init__(
        self,
        settings: Optional[ConverterSettings] = None,
        parser: Optional[HurlParser] = None,
    ) -> None:
        self.settings = settings or ConverterSettings()
        self.parser = parser or HurlParser()

    def generate_bru(self, request: HurlRequest, seq: int) -> str:
        """Serialize one request as a .bru file.

        Args:
            request: Parsed Hurl request
            seq: 1-based position of the request within its folder

        Returns:
            .bru file content, newline-terminated
        """
        sections = [
            _block(
                "meta",
                [f"name: {display_name(request)}", "type: http", f"seq: {seq}"],
            ),
            _block(
                request.method.lower(),
                [
                    f"url: {request.url}",
                    f"body: {'json' if request.body is not None else 'none'}",
                    "auth: none",
                ],
            ),
        ]

        if request.headers:
            sections.append(_block("headers", [f"{k}: {v}" for k, v in request.headers.items()]))

        if request.body is not None:
            # A '}' at column 0 would close the body:json block early
            indented = "\n".join(
                INDENT + line if line.strip() else line for line in request.body.split("\n")
            )
            sections.append(f"body:json {{\n{indented}\n}}")

        if request.status_code is not None:
            sections.append(_block("assert", [f"res.status: eq {request.status_code}"]))

        script = [capture_to_js(c) for c in request.captures]
        script.extend(assert_to_js(a) for a in request.asserts)
        if script:
            sections.append(_block("script:post-response", script))

        return "\n\n".join(sections) + "\n"

    def write_scaffolding(self, output_dir: PathLike) -> list[Path]:
        """Write the collection-level files.

        Args:
            output_dir: Collection root, created if missing

        Returns:
            Paths of the files written
        """
        root = Path(output_dir)
        env_dir = root / ENVIRONMENTS_DIR
        env_dir.mkdir(parents=True, exist_ok=True)

        descriptor = {
            "version": "1",
            "name": self.settings.collection_name,
            "type": "collection",
        }
        run_id = self.settings.run_id_variable
        files = {
            root / "bruno.json": json.dumps(descriptor, indent=2) + "\n",
            root / "collection.bru": (
                "script:pre-request {\n"
                f'  if (!bru.getVar("{run_id}")) {{\n'
                f'    bru.setVar("{run_id}", Date.now().toString()'
                " + Math.random().toString(36).substring(2, 6));\n"
                "  }\n"
                "}\n"
            ),
            env_dir / "local.bru": _block("vars", [f"host: {self.settings.host}"]) + "\n",
        }
        for path, content in files.items():
            _write(path, content)
        return list(files)

    def write_folder(self, hurl_path: PathLike, output_dir: PathLike) -> int:
        """Convert one Hurl file into a Bruno folder.

        Returns:
            Number of request files written
        """
        requests = self.parser.parse(hurl_path)
        folder = Path(output_dir) / folder_name(str(hurl_path))
        folder.mkdir(parents=True, exist_ok=True)

        for i, request in enumerate(requests):
            _write(folder / file_name(request, i), self.generate_bru(request, i + 1))
        return len(requests)

    def list_sources(self, source_dir: PathLike) -> list[Path]:
        """Hurl files in source_dir, sorted by name.

        Raises:
            FileNotFoundError: source_dir doesn't exist
        """
        source = Path(source_dir)
        if not source.is_dir():
            raise FileNotFoundError(f"Hurl directory not found: {source_dir}")
        return sorted(
            (p for p in source.iterdir() if p.is_file() and p.name.endswith(HURL_EXTENSION)),
            key=lambda p: p.name,
        )

    def generate_collection(
        self, source_dir: PathLike, output_dir: PathLike
    ) -> GenerationResult:
        """Write the full collection into output_dir without clearing it first."""
        sources = self.list_sources(source_dir)
        result = GenerationResult(output_dir=str(output_dir))
        result.files_written = len(self.write_scaffolding(output_dir))

        for hurl_path in sources:
            count = self.write_folder(hurl_path, output_dir)
            result.folders[folder_name(hurl_path.name)] = count
            result.files_written += count
        return result

    def regenerate(self, source_dir: PathLike, output_dir: PathLike) -> GenerationResult:
        """Delete output_dir and rebuild the collection from source_dir."""
        # Fail before deleting anything if there is nothing to build from
        self.list_sources(source_dir)
        output = Path(output_dir)
        if output.exists():
            shutil.rmtree(output)
        result = self.generate_collection(source_dir, output)
        # Folders from differently named Hurl files can collide
        result.files_written = sum(1 for p in output.rglob("*") if p.is_file())
        return result
