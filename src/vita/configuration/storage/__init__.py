"""Storage configurations."""

from vita.configuration.storage.local import LocalStorage

__all__ = ["LocalStorage"]
