"""Collection Checker for Bruno drift detection.

This module regenerates the Bruno collection into a scratch directory and
compares it file by file with the committed collection, without touching
the committed tree.
"""

import shutil
import tempfile
from pathlib import Path
from typing import Optional, Union

from hurl2bruno.core.bru_generator import BruGenerator
from hurl2bruno.core.hurl_data import CollectionDiff, DiffEntry

PathLike = Union[str, Path]


def collect_files(root: PathLike) -> dict[str, bytes]:
    """Read every file under root.

    Args:
        root: Directory to walk

    Returns:
        Relative '/'-separated path -> raw file bytes. Empty if root is missing.
    """
    base = Path(root)
    if not base.is_dir():
        return {}

    result = {}
    for path in base.rglob("*"):
        if path.is_file():
            result[path.relative_to(base).as_posix()] = path.read_bytes()
    return result


class CollectionChecker:
    """Compare a committed Bruno collection with its Hurl sources.

    Example:
        >>> checker = CollectionChecker()
        >>> diff = checker.check("api/hurl", "api/bruno")
        >>> print(diff.summary)
        {'missing': 0, 'extra': 0, 'changed': 1}
    """

    SCRATCH_PREFIX = "bruno-check-"

    def __init__(self, generator: Optional[BruGenerator] = None) -> None:
        self.generator = generator or BruGenerator()

    def compare(self, expected: dict[str, bytes], actual: dict[str, bytes]) -> CollectionDiff:
        """Diff two {relative path: bytes} maps.

        Args:
            expected: Files as they would be generated
            actual: Files as committed

        Returns:
            CollectionDiff with entries sorted by path
        """
        entries = []
        for path in sorted(set(expected) | set(actual)):
            if path not in actual:
                entries.append(DiffEntry(path=path, kind="missing"))
            elif path not in expected:
                entries.append(DiffEntry(path=path, kind="extra"))
            elif expected[path] != actual[path]:
                entries.append(DiffEntry(path=path, kind="changed"))
        return CollectionDiff(entries=entries)

    def check(self, source_dir: PathLike, output_dir: PathLike) -> CollectionDiff:
        """Regenerate into a scratch directory and diff against output_dir.

        Raises:
            FileNotFoundError: source_dir doesn't exist
        """
        scratch = tempfile.mkdtemp(prefix=self.SCRATCH_PREFIX)
        try:
            self.generator.generate_collection(source_dir, scratch)
            return self.compare(collect_files(scratch), collect_files(output_dir))
        finally:
            shutil.rmtree(scratch, ignore_errors=True)
