"""User-facing notices in the supported locales.

The tutor's learners are native Traditional Chinese speakers, so notices
default to zh-TW; the tutoring conversation itself is always in English.
"""

from pydantic import BaseModel, ConfigDict


class TutorMessages(BaseModel):
    """Fixed strings shown to the user by the orchestrators."""

    model_config = ConfigDict(frozen=True)

    welcome: str
    summary_fallback: str
    starters_missing: str
    analysis_failed: str
    chat_failed: str

    def analysis_error(self, description: str) -> str:
        return f"{self.analysis_failed}{description}"

    def chat_error(self, description: str) -> str:
        return f"{self.chat_failed}{description}"


WELCOME_MESSAGE = "Welcome to Light English Teacher! please provide an article to start."

MESSAGES = {
    "zh-TW": TutorMessages(
        welcome=WELCOME_MESSAGE,
        summary_fallback="抱歉，無法生成摘要。",
        starters_missing="無法解析對話啟動器。",
        analysis_failed="分析失敗: ",
        chat_failed="抱歉，發生錯誤: ",
    ),
    "en": TutorMessages(
        welcome=WELCOME_MESSAGE,
        summary_fallback="Sorry, unable to generate summary.",
        starters_missing="Unable to parse conversation starters.",
        analysis_failed="Analysis failed: ",
        chat_failed="Sorry, an error occurred: ",
    ),
}

DEFAULT_MESSAGES = MESSAGES["zh-TW"]


def get_messages(locale: str | None = None) -> TutorMessages:
    """Get notices for a locale, falling back to zh-TW.

    Matches on the language part too, so ``en-US`` resolves to ``en``.
    """
    if not locale:
        return DEFAULT_MESSAGES
    if locale in MESSAGES:
        return MESSAGES[locale]
    language = locale.replace("_", "-").split("-")[0].lower()
    return MESSAGES.get(language, DEFAULT_MESSAGES)
