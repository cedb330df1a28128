"""
MongoDB repository.

Implements IRepository for one collection.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from bson import ObjectId
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from resource_query.adapters.mongodb.query_translator import MongoQueryTranslator
from resource_query.core.errors import RepositoryError
from resource_query.core.models import FilterClause, GeoConstraint, SortField

logger = logging.getLogger(__name__)


def _serialize(value: Any) -> Any:
    """Convert ObjectIds to strings for JSON serialization."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {key: _serialize(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_serialize(item) for item in value]
    return value


class MongoRepository:
    """
    Read access to the records stored in a MongoDB collection.

    Implements the IRepository interface for MongoDB.
    """

    def __init__(
        self,
        collection: Collection,
        translator: Optional[MongoQueryTranslator] = None,
        user_field: str = "user",
    ):
        """
        Initialize MongoDB repository.

        Args:
            collection: Collection holding the resource records
            translator: Plan-to-MongoDB translator
            user_field: Field referencing the owning user
        """
        self.collection = collection
        self.translator = translator or MongoQueryTranslator()
        self.user_field = user_field

    def count(self) -> int:
        try:
            return self.collection.count_documents({})
        except PyMongoError as e:
            logger.error("Count failed on '%s': %s", self.collection.name, e)
            raise RepositoryError(str(e)) from e

    def find(
        self,
        filters: Sequence[FilterClause],
        geo: Optional[GeoConstraint],
        projection: Sequence[str],
        sort: Sequence[SortField],
        skip: int,
        limit: int,
    ) -> List[Dict[str, Any]]:
        query = self.translator.translate_filters(filters, geo)
        fields = self.translator.translate_projection(projection)
        sort_spec = self.translator.translate_sort(sort)

        try:
            cursor = self.collection.find(query, fields)
            if sort_spec:
                cursor = cursor.sort(sort_spec)
            documents = list(cursor.skip(skip).limit(limit))
        except PyMongoError as e:
            logger.error("Find failed on '%s': %s", self.collection.name, e)
            raise RepositoryError(str(e)) from e

        return [_serialize(doc) for doc in documents]

    def find_by_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch the record owned by a user.

        Args:
            user_id: Hex ObjectId of the owning user

        Returns:
            The record, or None if the id is malformed or nothing matches
        """
        if not ObjectId.is_valid(user_id):
            return None

        try:
            document = self.collection.find_one({self.user_field: ObjectId(user_id)})
        except PyMongoError as e:
            logger.error("Lookup failed on '%s': %s", self.collection.name, e)
            raise RepositoryError(str(e)) from e

        return _serialize(document) if document is not None else None
