"""MongoDB adapter for resource queries."""

from resource_query.adapters.mongodb.connection import MongoConnection
from resource_query.adapters.mongodb.query_translator import MongoQueryTranslator
from resource_query.adapters.mongodb.repository import MongoRepository

__all__ = ["MongoConnection", "MongoQueryTranslator", "MongoRepository"]
