"""stampgen public facade."""

from __future__ import annotations

from importlib import import_module

__all__ = ["BuildConfig", "Instructions", "generate", "emit"]


def __getattr__(name: str):
    if name in __all__:
        return getattr(import_module("stampgen.services.build"), name)
    raise AttributeError(name)
