"""Session container"""

from .dependency_injection import CartSession

__all__ = ["CartSession"]
