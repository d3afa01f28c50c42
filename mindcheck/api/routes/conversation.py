from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse

from mindcheck.api.deps import get_conversation_service
from mindcheck.schemas.conversation import (
    ConversationState,
    SendMessageRequest,
    SendMessageResponse,
)
from mindcheck.schemas.reports import Report
from mindcheck.services.conversation import ConversationService
from mindcheck.services.export import format_report, report_filename

router = APIRouter()


@router.get(
    "",
    response_model=ConversationState,
    summary="Return the current transcript, flags, report and error banner.",
)
async def get_conversation(
    service: ConversationService = Depends(get_conversation_service),
) -> ConversationState:
    return service.snapshot()


@router.post(
    "/messages",
    response_model=SendMessageResponse,
    summary="Send a user message and wait for the bot reply.",
)
async def send_message(
    payload: SendMessageRequest,
    service: ConversationService = Depends(get_conversation_service),
) -> SendMessageResponse:
    reply = await service.send_message(payload.content)
    return SendMessageResponse(
        accepted=reply is not None,
        reply=reply,
        state=service.snapshot(),
    )


@router.post(
    "/report",
    response_model=Report,
    summary="Synthesize a well-being report from the transcript.",
)
async def generate_report(
    service: ConversationService = Depends(get_conversation_service),
) -> Report:
    return await service.generate_report()


@router.get(
    "/report/download",
    response_class=PlainTextResponse,
    summary="Download the current report as a plain-text attachment.",
)
async def download_report(
    service: ConversationService = Depends(get_conversation_service),
) -> PlainTextResponse:
    if service.current_report is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No report generated yet.")
    return PlainTextResponse(
        format_report(service.current_report),
        headers={"Content-Disposition": f'attachment; filename="{report_filename()}"'},
    )


@router.post(
    "/report/export",
    summary="Save the current report through the configured report storage.",
)
async def export_report(
    service: ConversationService = Depends(get_conversation_service),
) -> dict[str, str | None]:
    if service.current_report is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No report generated yet.")
    location = await service.download_report()
    if location is None:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=service.last_error or "Report storage unavailable.",
        )
    return {"location": location}


@router.delete(
    "/error",
    response_model=ConversationState,
    summary="Dismiss the current error banner.",
)
async def clear_error(
    service: ConversationService = Depends(get_conversation_service),
) -> ConversationState:
    service.clear_error()
    return service.snapshot()
