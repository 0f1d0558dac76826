"""
Canonical Types for the Users Collection

Defines the User entity stored in `blog.users` and the value types
accepted by field-level filters and updates.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Union

from bson import ObjectId


# Values accepted for equality filters and $set updates. Passed to the
# store unchanged, so numeric fields must be matched with numeric values.
FieldValue = Union[str, int, float, bool, ObjectId, datetime, None]

# Identifiers may be given as ObjectId or as their 24-hex string form
UserId = Union[ObjectId, str]


@dataclass
class User:
    """
    A single document of the users collection.

    Stored keys are lowercase (name, age, blog, location); the identifier
    lives under `_id` and is assigned by the store on insert when unset.
    """
    name: str = ""
    age: int = 0
    blog: str = ""
    location: str = ""
    id: Optional[UserId] = None

    def to_document(self) -> Dict[str, Any]:
        """
        Convert to a MongoDB document, omitting _id when not yet assigned.

        A hex string id is stored as ObjectId so later lookups by id match.
        """
        doc: Dict[str, Any] = {
            "name": self.name,
            "age": self.age,
            "blog": self.blog,
            "location": self.location,
        }
        if self.id is not None:
            doc["_id"] = to_object_id(self.id)
        return doc

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "User":
        """Build a User from a stored document. Unknown keys are ignored."""
        return cls(
            name=doc.get("name", ""),
            age=doc.get("age", 0),
            blog=doc.get("blog", ""),
            location=doc.get("location", ""),
            id=doc.get("_id"),
        )


def to_object_id(user_id: UserId) -> ObjectId:
    """
    Normalize an identifier to ObjectId.

    Raises:
        bson.errors.InvalidId: If a string is not a valid ObjectId
    """
    if isinstance(user_id, ObjectId):
        return user_id
    return ObjectId(user_id)
