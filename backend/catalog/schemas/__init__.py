"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - JSON field names are camelCase (the public site reads artistId, spotifyUrl, ...)

Design Decisions:
    - Separate from core entities: schemas are API contracts, entities are domain values
"""
