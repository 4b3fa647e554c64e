"""
Conduit: content API for a blogging platform.

Application package root. This is a modular monolith using
hexagonal architecture (ports & adapters).

Bounded contexts:
    - content: Users, profiles and follows, articles with tags and
      favorites, comments.

Layers:
    - domain: Entities, ports (ABCs), errors.
    - application: Use cases, DTOs, orchestration.
    - infrastructure: Adapters (SQL store, hashing, tokens) implementing ports.
    - interfaces: FastAPI routers, Pydantic schemas.
    - shared: Cross-cutting concerns (errors, security, logging).
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("conduit-content-api")
except PackageNotFoundError:
    # Running from a source checkout that was never installed.
    __version__ = "0.0.0+unknown"
