"""Intent classification of chat queries."""

import logging
import re

from pydantic import ValidationError

from travelbot.chat.models import Classification
from travelbot.chat.prompts import CLASSIFIER_SYSTEM_PROMPT, classifier_prompt
from travelbot.llm.gateway import ModelGateway

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"^```[a-zA-Z]*\s*(.*?)\s*```$", re.DOTALL)


def parse_classification(raw: str) -> Classification:
    """Parse the classifier's JSON answer, defaulting to ``other`` on any problem."""
    text = raw.strip()
    fenced = _CODE_FENCE.match(text)
    if fenced:
        text = fenced.group(1)

    try:
        return Classification.model_validate_json(text)
    except ValidationError as e:
        logger.warning(f"Unparseable classification {raw!r}: {e.error_count()} error(s)")
        return Classification()


class IntentClassifier:
    """Maps a query to an intent and a bounded keyword list."""

    def __init__(self, gateway: ModelGateway):
        self.gateway = gateway

    async def classify(self, message: str) -> Classification:
        raw = await self.gateway.generate_text(
            classifier_prompt(message),
            system_instruction=CLASSIFIER_SYSTEM_PROMPT,
        )
        classification = parse_classification(raw)
        logger.info(
            f"Classified query as {classification.intent.value} "
            f"with keywords {classification.keywords}"
        )
        return classification
