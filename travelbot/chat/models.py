"""Chat turn models and data structures."""

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, field_validator

from travelbot.errors import QueryValidationError

MAX_KEYWORDS = 5


class ChatLanguage(str, Enum):
    """Reply languages. Vietnamese is the primary language."""

    VI = "vi"
    EN = "en"

    @classmethod
    def from_tag(cls, tag: str | None) -> "ChatLanguage":
        """Map a requested tag to a language, defaulting to Vietnamese."""
        return cls.EN if tag == cls.EN.value else cls.VI


class Intent(str, Enum):
    """Purpose of a query, as decided by the classifier."""

    DESTINATION = "destination"
    RESTAURANT = "restaurant"
    HOTEL = "hotel"
    SERVICE = "service"
    APP_GUIDE = "app_guide"
    OTHER = "other"


class ResultType(str, Enum):
    """Category of a structured search result."""

    DESTINATION = "destination"
    RESTAURANT = "restaurant"
    HOTEL = "hotel"


@dataclass
class ChatQuery:
    """A validated chat request."""

    text: str
    language: ChatLanguage = ChatLanguage.VI

    @classmethod
    def from_raw(cls, message: str | None, lang: str | None = None) -> "ChatQuery":
        text = (message or "").strip()
        if not text:
            raise QueryValidationError("Message must not be empty")
        return cls(text=text, language=ChatLanguage.from_tag(lang))


class Classification(BaseModel):
    """Intent and search keywords extracted from a query."""

    intent: Intent = Intent.OTHER
    keywords: list[str] = Field(default_factory=list)

    @field_validator("intent", mode="before")
    @classmethod
    def _coerce_intent(cls, value: Any) -> Intent:
        if isinstance(value, str):
            try:
                return Intent(value.strip().lower())
            except ValueError:
                pass
        return Intent.OTHER

    @field_validator("keywords", mode="before")
    @classmethod
    def _coerce_keywords(cls, value: Any) -> list[str]:
        if not isinstance(value, list):
            return []
        terms = (item.strip() for item in value if isinstance(item, str))
        return [term for term in terms if term][:MAX_KEYWORDS]

    def search_terms(self, fallback: str) -> list[str]:
        """Keywords to search with, or ``[fallback]`` when there are none."""
        terms = [keyword.strip() for keyword in self.keywords]
        terms = [term for term in terms if term][:MAX_KEYWORDS]
        return terms or [fallback]


class SearchResultItem(BaseModel):
    """A recommendation rendered from a database row."""

    name: str
    address: str | None = None
    description: str | None = None
    type: ResultType


class DatabaseResponse(BaseModel):
    """Recommendations found in the database."""

    source: Literal["database"] = "database"
    data: list[SearchResultItem]
    text: str | None = None


class AIResponse(BaseModel):
    """Free text produced by the generation backend."""

    source: Literal["ai"] = "ai"
    text: str


ChatResponse = Annotated[DatabaseResponse | AIResponse, Field(discriminator="source")]
