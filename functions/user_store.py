import logging
from contextlib import contextmanager
from dataclasses import replace
from typing import Optional

import pymongo
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from models.rating import Rating
from models.user_record import Assigned, Unassigned, UserRecord, from_document, to_document
from utils.errors import ConflictError, DocumentDecodeError, StoreError
from utils.tag_set import merge_tags

logger = logging.getLogger("myday_api.store")


class UserRecordStore:
    """
    Create, fetch and replace per-user documents in one MongoDB collection.

    Each call is bounded by `timeout` seconds. There is no locking around
    append: two concurrent appends for the same username both read, mutate
    and replace the whole document, so the later replace wins.
    """

    def __init__(self, collection: Collection, timeout: float = 5):
        self.collection = collection
        self.timeout = timeout

    @contextmanager
    def _operation(self, action: str, username: str):
        try:
            with pymongo.timeout(self.timeout):
                yield
        except PyMongoError as e:
            logger.error(f"❌ MongoDB {action} failed for {username}: {e}", extra={'color': True})
            raise StoreError(f"MongoDB {action} failed for {username}: {e}", timeout=e.timeout) from e

    def ensure_indexes(self):
        """Make Username the unique key of the collection"""
        with self._operation("create_index", "Username"):
            self.collection.create_index("Username", unique=True)

    def fetch(self, username: str) -> Optional[UserRecord]:
        """Return the record for `username`, or None when it is absent or cannot be decoded"""
        with self._operation("find", username):
            document = self.collection.find_one({"Username": username})

        if document is None:
            logger.info(f"No user data found for {username}")
            return None

        try:
            record = from_document(document)
        except DocumentDecodeError as e:
            logger.warning(f"⚠️ User data for {username} could not be decoded: {e}", extra={'color': True})
            return None

        logger.info(f"User data found for {username}")
        return record

    def create(self, username: str) -> UserRecord:
        """
        Insert an empty record for a new user.

        Raises:
            ConflictError: a record already exists, or the unique index
                rejects the insert; nothing is written
            StoreError: the store could not be reached or timed out
        """
        if self.fetch(username) is not None:
            raise ConflictError(username)

        record = self.save(UserRecord(username=username))
        logger.info(f"New user data created for {username}")
        return record

    def append(self, record: UserRecord, rating: Rating) -> UserRecord:
        """Append a rating to a fetched record, merge its tags and replace the stored document"""
        if not isinstance(record.identity, Assigned):
            raise ValueError("append needs a record that was fetched from the store")

        updated = replace(
            record,
            ratings=[*record.ratings, rating],
            tags=merge_tags(record.tags, rating.tags),
        )
        self.save(updated)
        logger.info(f"Received rating for {record.username}: {rating}")
        return updated

    def save(self, record: UserRecord) -> UserRecord:
        """Insert a record without identity, replace one that has it"""
        document = to_document(record)

        if isinstance(record.identity, Unassigned):
            with self._operation("insert", record.username):
                try:
                    result = self.collection.insert_one(document)
                except DuplicateKeyError as e:
                    # Lost a race with another create, or an undecodable document holds the name
                    raise ConflictError(record.username) from e
            return replace(record, identity=Assigned(result.inserted_id))

        with self._operation("replace", record.username):
            self.collection.replace_one({"_id": record.identity.object_id}, document)
        return record
