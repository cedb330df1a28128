"""
Resource Query - query-string search for marketplace listings.

Main entry point for translating request parameters into paged queries.
"""

from resource_query.orchestrator import ResourceOrchestrator
from resource_query.query.translator import QueryTranslator

__all__ = ["ResourceOrchestrator", "QueryTranslator"]
