"""Small shared helpers: identifiers and clock."""

from foodies.utils.clock import utcnow
from foodies.utils.ids import new_id


__all__ = ["new_id", "utcnow"]
