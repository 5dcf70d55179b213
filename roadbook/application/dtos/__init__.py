"""Application DTOs (no HTTP schema dependency)."""

from roadbook.application.dtos.search import SearchAttempt, SearchResult

__all__ = ["SearchAttempt", "SearchResult"]
