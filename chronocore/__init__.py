"""
.. include:: ../README.md
"""

__all__ = [
    "config",
    "exceptions",
    "temporal",
    "tzif",
    "util",
    "zone",
]
