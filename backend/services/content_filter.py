"""
Content Filter
Local lexical profanity check run before anything is sent to a provider
"""
import logging
from typing import Iterable, Optional

from better_profanity import Profanity

logger = logging.getLogger(__name__)


class ContentFilter:
    """Decides whether a prompt is acceptable to process further"""

    def __init__(self, extra_words: Optional[Iterable[str]] = None):
        self._profanity = Profanity()
        if extra_words:
            self._profanity.add_censor_words(list(extra_words))

    def is_clean(self, text: str) -> bool:
        """True when the text contains no disallowed words"""
        flagged = self._profanity.contains_profanity(text)
        if flagged:
            logger.info("[FILTER] Prompt rejected by profanity check")
        return not flagged
