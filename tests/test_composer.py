"""Tests for response composition and translation."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from travelbot.chat.composer import (
    ResponseComposer,
    build_summary,
    cooperation_item,
    destination_item,
    join_address,
)
from travelbot.chat.models import ChatLanguage, ResultType, SearchResultItem
from travelbot.chat.prompts import ITEMS_TRANSLATION_PROMPT, SUMMARY_TRANSLATION_PROMPT
from travelbot.errors import GenerationError, ServiceUnavailableError
from travelbot.storage import CooperationRecord, DestinationRecord


@pytest.fixture
def gateway():
    gateway = MagicMock()
    gateway.generate_text = AsyncMock()
    return gateway


class TestItemMapping:
    """Test mapping of rows to result items."""

    def test_join_address(self):
        assert join_address(["12 Bạch Đằng", None, " ", "Đà Nẵng"]) == "12 Bạch Đằng, Đà Nẵng"
        assert join_address([None, "", "  "]) is None

    def test_destination_description_language_preference(self):
        row = DestinationRecord(name="Huế", description_vi="Cố đô", description_en="Old capital")

        assert destination_item(row, ChatLanguage.VI).description == "Cố đô"
        assert destination_item(row, ChatLanguage.EN).description == "Old capital"

    def test_destination_description_falls_back_to_other_language(self):
        row = DestinationRecord(name="Huế", description_vi="Cố đô")

        assert destination_item(row, ChatLanguage.EN).description == "Cố đô"
        assert destination_item(DestinationRecord(name="Huế"), ChatLanguage.VI).description is None

    def test_destination_address(self):
        row = DestinationRecord(name="Cầu Rồng", specific_address="Nguyễn Văn Linh", province="Đà Nẵng")

        item = destination_item(row, ChatLanguage.VI)

        assert item.address == "Nguyễn Văn Linh, Đà Nẵng"
        assert item.type is ResultType.DESTINATION

    def test_cooperation_item(self):
        row = CooperationRecord(
            name="Bé Mặn",
            type="restaurant",
            address="Võ Nguyên Giáp",
            district="Sơn Trà",
            city="Đà Nẵng",
            extension="Hải sản tươi",
        )

        item = cooperation_item(row, ResultType.RESTAURANT)

        assert item.address == "Võ Nguyên Giáp, Sơn Trà, Đà Nẵng"
        assert item.description == "Hải sản tươi"
        assert item.type is ResultType.RESTAURANT


class TestBuildSummary:
    """Test localized summary rendering."""

    ITEMS = [
        SearchResultItem(name="Bé Mặn", address="Đà Nẵng", description="Hải sản tươi", type=ResultType.RESTAURANT),
        SearchResultItem(name="Năm Đảnh", type=ResultType.RESTAURANT),
    ]

    def test_vietnamese(self):
        summary = build_summary(ResultType.RESTAURANT, self.ITEMS, ChatLanguage.VI)

        assert summary == (
            "Dưới đây là một vài nhà hàng/quán ăn bạn có thể tham khảo:\n"
            "• Bé Mặn, địa chỉ: Đà Nẵng. Gợi ý: Hải sản tươi\n"
            "• Năm Đảnh"
        )

    def test_english_numbered_list(self):
        summary = build_summary(ResultType.RESTAURANT, self.ITEMS, ChatLanguage.EN)

        assert summary == "1. Bé Mặn - Đà Nẵng\n2. Năm Đảnh"

    def test_empty(self):
        assert build_summary(ResultType.HOTEL, [], ChatLanguage.VI) == ""


class TestResponseComposer:
    """Test composition and translation fallbacks."""

    ROWS = [
        CooperationRecord(name="Bé Mặn", type="restaurant", city="Đà Nẵng", introduction="Hải sản tươi"),
        CooperationRecord(name="Năm Đảnh", type="restaurant", city="Đà Nẵng", introduction="Ốc ngon"),
    ]

    @pytest.mark.asyncio
    async def test_vietnamese_needs_no_translation(self, gateway):
        composer = ResponseComposer(gateway)

        response = await composer.compose(ResultType.RESTAURANT, self.ROWS, ChatLanguage.VI)

        assert response.source == "database"
        assert len(response.data) == 2
        assert response.text.startswith("Dưới đây là một vài nhà hàng/quán ăn")
        gateway.generate_text.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_english_translates_summary_and_items(self, gateway):
        gateway.generate_text.side_effect = [
            "1. Be Man - Da Nang\n2. Nam Danh - Da Nang",
            "1. Fresh seafood\n2) Tasty snails",
        ]
        composer = ResponseComposer(gateway)

        response = await composer.compose(ResultType.RESTAURANT, self.ROWS, ChatLanguage.EN)

        assert response.text == "1. Be Man - Da Nang\n2. Nam Danh - Da Nang"
        assert [item.description for item in response.data] == ["Fresh seafood", "Tasty snails"]

        summary_call, items_call = gateway.generate_text.call_args_list
        assert summary_call[0][0] == "1. Bé Mặn - Đà Nẵng\n2. Năm Đảnh - Đà Nẵng"
        assert summary_call[1]["system_instruction"] == SUMMARY_TRANSLATION_PROMPT
        assert items_call[0][0] == "1. Hải sản tươi\n2. Ốc ngon"
        assert items_call[1]["system_instruction"] == ITEMS_TRANSLATION_PROMPT

    @pytest.mark.asyncio
    async def test_empty_translation_keeps_originals(self, gateway):
        gateway.generate_text.return_value = ""
        composer = ResponseComposer(gateway)

        response = await composer.compose(ResultType.RESTAURANT, self.ROWS, ChatLanguage.EN)

        assert response.text == "1. Bé Mặn - Đà Nẵng\n2. Năm Đảnh - Đà Nẵng"
        assert [item.description for item in response.data] == ["Hải sản tươi", "Ốc ngon"]

    @pytest.mark.asyncio
    async def test_failed_translation_keeps_originals(self, gateway):
        gateway.generate_text.side_effect = ServiceUnavailableError("overloaded")
        composer = ResponseComposer(gateway)

        response = await composer.compose(ResultType.RESTAURANT, self.ROWS, ChatLanguage.EN)

        assert response.text == "1. Bé Mặn - Đà Nẵng\n2. Năm Đảnh - Đà Nẵng"
        assert [item.description for item in response.data] == ["Hải sản tươi", "Ốc ngon"]

    @pytest.mark.asyncio
    async def test_missing_translated_line_keeps_original(self, gateway):
        items = [
            SearchResultItem(name="A", description="một", type=ResultType.HOTEL),
            SearchResultItem(name="B", description="hai", type=ResultType.HOTEL),
        ]
        gateway.generate_text.return_value = "1. one"
        composer = ResponseComposer(gateway)

        translated = await composer.translate_items(items)

        assert [item.description for item in translated] == ["one", "hai"]

    @pytest.mark.asyncio
    async def test_names_translated_when_no_description(self, gateway):
        items = [SearchResultItem(name="Chợ Hàn", type=ResultType.DESTINATION)]
        gateway.generate_text.return_value = "1. Han Market"
        composer = ResponseComposer(gateway)

        translated = await composer.translate_items(items)

        assert gateway.generate_text.call_args[0][0] == "1. Chợ Hàn"
        assert translated[0].description == "Han Market"
        assert translated[0].name == "Chợ Hàn"

    @pytest.mark.asyncio
    async def test_translate_summary_failure(self, gateway):
        gateway.generate_text.side_effect = GenerationError("failed")
        composer = ResponseComposer(gateway)

        assert await composer.translate_summary("1. Huế") == "1. Huế"
