"""Infrastructure Layer — store adapters, database sessions and cross-cutting concerns.

Invariants:
    - Infrastructure implements core protocols; core never imports from here
    - Every adapter maps its native failures to CatalogError subclasses

Design Decisions:
    - One adapter per persistence backend (SQL, flat JSON files, in-memory)
"""
