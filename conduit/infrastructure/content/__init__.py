"""
Infrastructure adapters for the content bounded context.

Each adapter implements a domain port (ABC) on top of SQLAlchemy,
passlib or python-jose.
"""
