"""
User domain model.
Identity record for task authors, assignees and the current viewer.
"""

from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any

from app.domain.models.base import ValidationError


@dataclass(frozen=True)
class User:
    """
    User identity as supplied by the data layer.

    Only ``id`` takes part in decisions (ownership and visibility checks);
    the remaining fields are handed to the templates as-is.
    """

    id: str
    name: str = ""
    avatar_url: Optional[str] = None
    email: Optional[str] = None

    def __post_init__(self):
        """Validate user after creation."""
        if self.id is None or str(self.id).strip() == "":
            raise ValidationError("User ID is required", "id")

    def is_same_user(self, other: Optional["User"]) -> bool:
        """Check whether both records identify the same person."""
        if other is None:
            return False
        return self.id == other.id

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, used when spreading into templates."""
        return asdict(self)
