from .lens import Fallback, Lens
from .defaults import MissingKeyError, default_table

__all__ = ["Fallback", "Lens", "MissingKeyError", "default_table"]
