"""
Infrastructure Layer

Contains the ambient plumbing around the cart:
- Configuration management
- Logging infrastructure
- Error taxonomy
- Session container (cart ownership and lifecycle)
"""
