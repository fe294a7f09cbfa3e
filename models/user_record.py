from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

from models.rating import Rating
from utils.date_codec import decode_storage, encode_storage
from utils.errors import DocumentDecodeError, FormatError


@dataclass(frozen=True)
class Unassigned:
    """Identity of a record the store has not seen yet"""


@dataclass(frozen=True)
class Assigned:
    """Identity handed out by the store on first insert"""
    object_id: Any


Identity = Union[Unassigned, Assigned]


@dataclass
class UserRecord:
    username: str
    ratings: List[Rating] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    identity: Identity = field(default_factory=Unassigned)


def rating_to_document(rating: Rating) -> Dict[str, Any]:
    return {
        "Date": encode_storage(rating.date),
        "Description": rating.description,
        "Feeling": rating.feeling,
        "Tags": list(rating.tags),
    }


def rating_from_document(doc: Dict[str, Any]) -> Rating:
    return Rating(
        date=decode_storage(doc["Date"]),
        description=_expect(doc.get("Description", ""), str, "Description"),
        feeling=_expect(doc.get("Feeling", ""), str, "Feeling"),
        tags=_string_list(doc.get("Tags"), "Ratings.Tags"),
    )


def to_document(record: UserRecord) -> Dict[str, Any]:
    """Build the stored document; _id is left out until the store assigns one"""
    document = {
        "Username": record.username,
        "Ratings": [rating_to_document(rating) for rating in record.ratings],
        "Tags": list(record.tags),
    }
    if isinstance(record.identity, Assigned):
        document = {"_id": record.identity.object_id, **document}
    return document


def from_document(doc: Dict[str, Any]) -> UserRecord:
    """
    Rebuild a user record from a stored document.

    Raises:
        DocumentDecodeError: when a field is missing or has the wrong type
    """
    try:
        if "_id" not in doc:
            raise DocumentDecodeError("Stored document has no _id")

        ratings = doc.get("Ratings") or []
        if not isinstance(ratings, list):
            raise DocumentDecodeError("Ratings must be an array")

        return UserRecord(
            identity=Assigned(doc["_id"]),
            username=_expect(doc["Username"], str, "Username"),
            ratings=[rating_from_document(item) for item in ratings],
            tags=_string_list(doc.get("Tags"), "Tags"),
        )
    except DocumentDecodeError:
        raise
    except (KeyError, TypeError, AttributeError, FormatError) as e:
        raise DocumentDecodeError(f"Unable to decode user document: {e!r}") from e


def _expect(value, expected_type, name):
    if not isinstance(value, expected_type):
        raise DocumentDecodeError(f"{name} must be {expected_type.__name__}, got {type(value).__name__}")
    return value


def _string_list(value, name) -> List[str]:
    # A missing array decodes as empty, like a null array in the stored document
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise DocumentDecodeError(f"{name} must be an array of strings")
    return list(value)
