"""
Application Layer

Contains the use cases the menu, cart drawer and checkout surfaces call.
They orchestrate the cart engine and translate its errors into responses.
"""
