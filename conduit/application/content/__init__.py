"""
Application layer for the content bounded context.

Use cases coordinate domain entities and ports to fulfill
the API operations. No framework or infrastructure imports allowed.
"""
