"""Response composition: result items, localized summaries, translation."""

import logging
import re
from collections.abc import Iterable, Sequence

from travelbot.chat.models import ChatLanguage, DatabaseResponse, ResultType, SearchResultItem
from travelbot.chat.prompts import (
    ITEMS_TRANSLATION_PROMPT,
    SUMMARY_TRANSLATION_PROMPT,
    summary_header,
)
from travelbot.errors import GatewayError
from travelbot.llm.gateway import ModelGateway
from travelbot.storage.base import CooperationRecord, DestinationRecord

logger = logging.getLogger(__name__)

_ENUMERATION = re.compile(r"^[0-9]+[).\-\s]*")


def join_address(parts: Iterable[str | None]) -> str | None:
    """Join the non-empty address fragments with a comma."""
    value = ", ".join(part.strip() for part in parts if part and part.strip())
    return value or None


def _first_present(*values: str | None) -> str | None:
    for value in values:
        if value and value.strip():
            return value
    return None


def destination_item(row: DestinationRecord, lang: ChatLanguage) -> SearchResultItem:
    if lang is ChatLanguage.EN:
        description = _first_present(row.description_en, row.description_vi)
    else:
        description = _first_present(row.description_vi, row.description_en)
    return SearchResultItem(
        name=row.name,
        address=join_address([row.specific_address, row.province]),
        description=description,
        type=ResultType.DESTINATION,
    )


def cooperation_item(row: CooperationRecord, category: ResultType) -> SearchResultItem:
    return SearchResultItem(
        name=row.name,
        address=join_address([row.address, row.district, row.city, row.province]),
        description=_first_present(row.introduction, row.extension),
        type=category,
    )


def build_summary(category: ResultType, items: Sequence[SearchResultItem], lang: ChatLanguage) -> str:
    """Render the summary text for a list of items.

    The Vietnamese rendering is a header followed by one bullet per item.
    The English rendering is a numbered ``name - address`` list that is
    meant to be passed through translation.
    """
    if not items:
        return ""

    if lang is ChatLanguage.EN:
        return "\n".join(
            f"{index}. {item.name}{f' - {item.address}' if item.address else ''}"
            for index, item in enumerate(items, 1)
        )

    bullets = []
    for item in items:
        address = f", địa chỉ: {item.address}" if item.address else ""
        description = f". Gợi ý: {item.description}" if item.description else ""
        bullets.append(f"• {item.name}{address}{description}")
    return "\n".join([summary_header(category), *bullets])


class ResponseComposer:
    """Turns search rows into a ``database`` response in the requested language."""

    def __init__(self, gateway: ModelGateway):
        self.gateway = gateway

    def to_items(
        self,
        category: ResultType,
        rows: Sequence[DestinationRecord | CooperationRecord],
        lang: ChatLanguage,
    ) -> list[SearchResultItem]:
        if category is ResultType.DESTINATION:
            return [destination_item(row, lang) for row in rows]
        return [cooperation_item(row, category) for row in rows]

    async def compose(
        self,
        category: ResultType,
        rows: Sequence[DestinationRecord | CooperationRecord],
        lang: ChatLanguage,
    ) -> DatabaseResponse:
        items = self.to_items(category, rows, lang)

        if lang is ChatLanguage.VI:
            return DatabaseResponse(data=items, text=build_summary(category, items, lang))

        summary = await self.translate_summary(build_summary(category, items, lang))
        items = await self.translate_items(items)
        return DatabaseResponse(data=items, text=summary)

    async def translate_summary(self, text: str) -> str:
        """Translate a summary block, returning it unchanged on failure."""
        if not text.strip():
            return text
        try:
            translated = await self.gateway.generate_text(
                text,
                system_instruction=SUMMARY_TRANSLATION_PROMPT,
            )
        except GatewayError as e:
            logger.warning(f"Summary translation failed, keeping original: {e}")
            return text
        return translated or text

    async def translate_items(self, items: list[SearchResultItem]) -> list[SearchResultItem]:
        """Translate item descriptions (or names) in one batched request.

        Items whose translated line is missing or empty keep their original
        description.
        """
        if not items:
            return items

        numbered = "\n".join(
            f"{index}. {item.description or item.name}" for index, item in enumerate(items, 1)
        )
        try:
            translated = await self.gateway.generate_text(
                numbered,
                system_instruction=ITEMS_TRANSLATION_PROMPT,
            )
        except GatewayError as e:
            logger.warning(f"Item translation failed, keeping originals: {e}")
            return items

        if not translated:
            return items

        lines = [line for line in translated.splitlines() if line.strip()]
        result = []
        for index, item in enumerate(items):
            line = _ENUMERATION.sub("", lines[index]).strip() if index < len(lines) else ""
            result.append(item.model_copy(update={"description": line or item.description}))
        return result
