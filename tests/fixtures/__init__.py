"""
Test Fixtures

Shared test data and a fake Xtream Codes provider.
"""

from .fake_provider import FakeXtreamProvider

__all__ = [
    "FakeXtreamProvider",
]
