"""Chat turn pipeline."""

from .models import (
    AIResponse,
    ChatLanguage,
    ChatQuery,
    ChatResponse,
    Classification,
    DatabaseResponse,
    Intent,
    ResultType,
    SearchResultItem,
)
from .service import ChatService

__all__ = [
    "AIResponse",
    "ChatLanguage",
    "ChatQuery",
    "ChatResponse",
    "ChatService",
    "Classification",
    "DatabaseResponse",
    "Intent",
    "ResultType",
    "SearchResultItem",
]
