"""Hurl to Bruno - Generate Bruno collections from Hurl API tests."""

__version__ = "1.0.0"

from hurl2bruno.core.bru_generator import BruGenerator
from hurl2bruno.core.collection_checker import CollectionChecker
from hurl2bruno.core.hurl_parser import HurlParser

__all__ = [
    "HurlParser",
    "BruGenerator",
    "CollectionChecker",
]
