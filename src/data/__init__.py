from .prices import PriceSnapshot
from .reference_cache import ReferenceCache, ReferenceSnapshot

__all__ = [
    "PriceSnapshot",
    "ReferenceCache",
    "ReferenceSnapshot",
]
