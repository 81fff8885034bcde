"""Client and query-driven pagination."""

from .controller import PaginationController, estimate_total

__all__ = ["PaginationController", "estimate_total"]
