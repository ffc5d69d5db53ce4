from symptombot.utils.messages import (
    history_to_messages,
    latest_ai_message,
    message_text,
    messages_to_history,
)

__all__ = [
    "history_to_messages",
    "latest_ai_message",
    "message_text",
    "messages_to_history",
]
