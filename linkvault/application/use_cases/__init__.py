"""Application use cases: one entry point per workflow."""

from linkvault.application.use_cases.bookmark_queries import BookmarkQueryService

__all__ = ["BookmarkQueryService"]
