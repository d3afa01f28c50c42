from mindcheck.core.config import get_settings
from mindcheck.integrations.providers import build_inference_client
from mindcheck.integrations.storage import build_report_sink
from mindcheck.services.conversation import ConversationService

_conversation_service: ConversationService | None = None


async def get_conversation_service() -> ConversationService:
    """Provide the process-local ConversationService singleton."""
    global _conversation_service
    if _conversation_service is None:
        settings = get_settings()
        _conversation_service = ConversationService(
            build_inference_client(settings),
            settings,
            report_sink=build_report_sink(settings),
        )
    return _conversation_service
