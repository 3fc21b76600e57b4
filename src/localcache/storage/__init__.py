"""Cache directory lookup."""

from .locator import CacheLocator, CacheMatch

__all__ = ["CacheLocator", "CacheMatch"]
