"""Sera food-ordering client: cart aggregation engine"""

__version__ = "1.0.0"
