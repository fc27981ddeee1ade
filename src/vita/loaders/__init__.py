"""Loaders that turn source documents into knowledge entry drafts."""

from vita.loaders.html import HTMLEntryLoader

__all__ = ["HTMLEntryLoader"]
