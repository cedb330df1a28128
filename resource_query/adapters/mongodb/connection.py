"""
MongoDB connection lifecycle.

The application opens one connection at startup, hands collections to its
repositories, and closes it at shutdown.
"""

import logging
from typing import Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

logger = logging.getLogger(__name__)


class MongoConnection:
    """
    Owns a MongoClient for the lifetime of the process.

    Usable as a context manager.
    """

    def __init__(self, mongo_uri: str, database_name: str, **client_kwargs):
        """
        Initialize MongoDB connection.

        Args:
            mongo_uri: MongoDB connection URI
            database_name: Name of the database
            **client_kwargs: Extra options passed to MongoClient
        """
        self.mongo_uri = mongo_uri
        self.database_name = database_name
        self.client_kwargs = client_kwargs

        self.client: Optional[MongoClient] = None
        self._db: Optional[Database] = None

    def open(self) -> "MongoConnection":
        if self.client is None:
            self.client = MongoClient(self.mongo_uri, **self.client_kwargs)
            self._db = self.client[self.database_name]
            logger.info("MongoDB connected: database '%s'", self.database_name)
        return self

    def close(self) -> None:
        if self.client is not None:
            self.client.close()
            logger.info("MongoDB connection closed")
        self.client = None
        self._db = None

    @property
    def db(self) -> Database:
        if self._db is None:
            raise RuntimeError("MongoConnection is not open")
        return self._db

    def collection(self, name: str) -> Collection:
        return self.db[name]

    def __enter__(self) -> "MongoConnection":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
