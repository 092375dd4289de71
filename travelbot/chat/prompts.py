"""Prompt texts for classification, translation and replies."""

from travelbot.chat.models import ChatLanguage, ResultType

CLASSIFIER_SYSTEM_PROMPT = (
    "Bạn là bộ phân loại truy vấn du lịch. Hãy xác định ý định của người dùng giữa các lựa chọn: "
    "destination, restaurant, hotel, service, app_guide, other. "
    "Cũng hãy trích xuất tối đa 5 từ khóa chính để tìm kiếm dữ liệu."
)


def classifier_prompt(message: str) -> str:
    return (
        f'Người dùng hỏi: "{message}". '
        'Hãy trả lời bằng JSON với cấu trúc {"intent": "...", "keywords": ["..."]}.'
    )


SUMMARY_TRANSLATION_PROMPT = (
    "You translate Vietnamese travel recommendations into natural English. "
    "Keep the structure and numbering when present."
)

ITEMS_TRANSLATION_PROMPT = (
    "Translate the following Vietnamese descriptions into concise English. "
    "Preserve the numbering and return only the translated lines."
)

REPLY_SYSTEM_PROMPTS = {
    ChatLanguage.VI: (
        "Bạn là chatbot tư vấn du lịch Việt Nam, hãy trả lời tự nhiên, hữu ích và thân thiện."
    ),
    ChatLanguage.EN: (
        "You are a helpful Vietnamese travel consultant. "
        "Respond in fluent English with warm, concise recommendations."
    ),
}

DATABASE_MISS_HINT = (
    "Dữ liệu hệ thống hiện không có kết quả phù hợp, "
    "hãy đưa ra gợi ý chung dựa trên hiểu biết của bạn."
)

EMPTY_REPLY = {
    ChatLanguage.VI: "Xin lỗi, tôi chưa thể phản hồi ngay lúc này.",
    ChatLanguage.EN: "Sorry, I can't answer right now.",
}

SUMMARY_KINDS = {
    ResultType.DESTINATION: "địa điểm du lịch",
    ResultType.RESTAURANT: "nhà hàng/quán ăn",
    ResultType.HOTEL: "khách sạn",
}


def summary_header(category: ResultType) -> str:
    return f"Dưới đây là một vài {SUMMARY_KINDS[category]} bạn có thể tham khảo:"
