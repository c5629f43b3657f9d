"""
Parsers for taxpayer profile formats.
"""

from .profile import JsonProfileParser, load_profile

__all__ = [
    "JsonProfileParser",
    "load_profile",
]
