"""Domain entities"""

from .menu_offering import MenuOffering

__all__ = ["MenuOffering"]
