"""
Result formatting utilities.

Builds the JSON envelopes returned by the listing endpoints.
"""

from typing import Any, Dict

from resource_query.core.models import PageResult


class ResultFormatter:
    """
    Formats query results into a consistent structure.

    Successful listings use ``{success, count, pagination, data}``; failures
    use ``{success, error}``.
    """

    @staticmethod
    def format_pagination(result: PageResult) -> Dict[str, Any]:
        """
        Build pagination links.

        Only the directions that exist are present, e.g.
        ``{"next": {"page": 3, "limit": 5}, "prev": {"page": 1, "limit": 5}}``.
        """
        pagination: Dict[str, Any] = {}
        if result.has_next:
            pagination["next"] = {"page": result.next_page, "limit": result.limit}
        if result.has_prev:
            pagination["prev"] = {"page": result.prev_page, "limit": result.limit}
        return pagination

    @staticmethod
    def format_page(result: PageResult) -> Dict[str, Any]:
        """
        Format a page of results.

        Args:
            result: Page produced by QueryTranslator.execute()

        Returns:
            Response envelope
        """
        return {
            "success": True,
            "count": result.count,
            "pagination": ResultFormatter.format_pagination(result),
            "data": result.items,
        }

    @staticmethod
    def format_error(message: str) -> Dict[str, Any]:
        return {"success": False, "error": message}
