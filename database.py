import logging
from typing import Optional

import pymongo
from fastapi import Request
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from config import Settings
from functions.user_store import UserRecordStore
from utils.errors import StoreError

logger = logging.getLogger("myday_api.database")


class MongoContext:
    """Owns the MongoDB client for the lifetime of the process"""

    def __init__(self, settings: Settings, client: Optional[MongoClient] = None):
        self.settings = settings
        self._client = client

    def open(self) -> "MongoContext":
        """Build the client and make sure the server answers within the connect timeout"""
        if self._client is None:
            kwargs = {"appname": self.settings.MONGO_APP_NAME}
            if self.settings.MONGO_USERNAME:
                kwargs["username"] = self.settings.MONGO_USERNAME
                kwargs["password"] = self.settings.MONGO_PASSWORD
            self._client = MongoClient(self.settings.MONGO_URI, **kwargs)

        try:
            with pymongo.timeout(self.settings.MONGO_CONNECT_TIMEOUT):
                self._client.admin.command("ping")
        except PyMongoError as e:
            logger.error(f"❌ Unable to reach MongoDB at {self.settings.MONGO_URI}: {e}", extra={'color': True})
            raise StoreError(f"Unable to connect to MongoDB: {e}", timeout=e.timeout) from e

        self.store().ensure_indexes()

        logger.info(f"✅ Opened connection to MongoDB {self.settings.MONGO_URI}", extra={'color': True})
        return self

    def close(self):
        if self._client is not None:
            self._client.close()
            self._client = None
            logger.info("🔌 Closed connection to MongoDB", extra={'color': True})

    @property
    def collection(self) -> Collection:
        if self._client is None:
            raise RuntimeError("MongoContext.open() must be called before use")
        return self._client[self.settings.MONGO_DATABASE][self.settings.MONGO_COLLECTION]

    def store(self) -> UserRecordStore:
        return UserRecordStore(self.collection, timeout=self.settings.MONGO_OPERATION_TIMEOUT)


def get_store(request: Request) -> UserRecordStore:
    """FastAPI dependency handing routes a store bound to the app's connection"""
    return request.app.state.mongo.store()
