"""Services Layer — imperative shell around the pure core.

Invariants:
    - Services talk to persistence only through the Store protocol
    - Pure decisions (slug text, guard outcome) are delegated to core/
"""
