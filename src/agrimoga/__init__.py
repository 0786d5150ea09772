"""
Agrimoga Advisory Engine

This package provides irrigation, disease-risk, fertilization and sales
advice for small berry and avocado farms.
"""

__version__ = "0.1.0"
__description__ = "Farm advisory engine for irrigation, disease risk, fertilization and pricing"


def __getattr__(name):
    """Lazy import to avoid importing dependencies when not needed."""
    if name == "AgrimogaApp":
        from .app import AgrimogaApp
        return AgrimogaApp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "AgrimogaApp",
]
