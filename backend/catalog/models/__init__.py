"""ORM Models — SQLAlchemy declarative models for catalog entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Column attribute names equal the core entity field names (1:1 mapping)

Design Decisions:
    - One file per entity for locality
    - MODELS maps each Collection to its table so SqlStore stays collection-generic
"""

from catalog.core.domain_types import Collection
from catalog.models.artist import ArtistModel
from catalog.models.release import ReleaseModel

MODELS = {
    Collection.ARTISTS: ArtistModel,
    Collection.RELEASES: ReleaseModel,
}

__all__ = ["ArtistModel", "ReleaseModel", "MODELS"]
