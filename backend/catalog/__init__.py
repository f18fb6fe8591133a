"""Label Catalog Application Package — artists, releases and their slug identifiers.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
