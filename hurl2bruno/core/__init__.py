"""Core modules for Hurl to Bruno conversion."""

from hurl2bruno.core.hurl_data import (
    CollectionDiff,
    DiffEntry,
    GenerationResult,
    HurlCapture,
    HurlRequest,
    TranslatedValue,
)
from hurl2bruno.core.hurl_parser import BraceScanner, HurlParser, ParserState
from hurl2bruno.core.translator import assert_to_js, capture_to_js, transform_value
from hurl2bruno.core.bru_generator import BruGenerator
from hurl2bruno.core.collection_checker import CollectionChecker, collect_files
from hurl2bruno.core.settings import ConverterSettings, load_settings

__all__ = [
    # Parsing
    "HurlParser",
    "ParserState",
    "BraceScanner",
    # Translation
    "transform_value",
    "assert_to_js",
    "capture_to_js",
    # Generation
    "BruGenerator",
    "CollectionChecker",
    "collect_files",
    "ConverterSettings",
    "load_settings",
    # Data structures
    "HurlCapture",
    "HurlRequest",
    "TranslatedValue",
    "GenerationResult",
    "DiffEntry",
    "CollectionDiff",
]
