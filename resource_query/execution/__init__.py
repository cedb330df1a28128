"""Result formatting."""

from resource_query.execution.result_formatter import ResultFormatter

__all__ = ["ResultFormatter"]
