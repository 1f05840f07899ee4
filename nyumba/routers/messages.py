"""
Messaging endpoints and the realtime change feed.
"""

import asyncio
import uuid
from uuid import UUID
from fastapi import APIRouter, Depends, Path, Query, WebSocket, WebSocketDisconnect, status
from jose import JWTError
import logging

from nyumba.models.user import Profile
from nyumba.schemas.error import get_common_error_responses, get_crud_error_responses
from nyumba.schemas.message import (
    ConversationListResponse,
    MessageCreate,
    MessageResponse,
    ThreadResponse,
    UnreadCountResponse
)
from nyumba.services.messaging import MessagingService
from nyumba.services.notifier import notifier
from nyumba.utils.auth import verify_token
from nyumba.utils.dependencies import get_current_active_user, get_messaging_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/messages", tags=["Messages"])


@router.post(
    "",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Send a message",
    responses=get_crud_error_responses()
)
async def send_message(
    message_data: MessageCreate,
    current_user: Profile = Depends(get_current_active_user),
    messaging_service: MessagingService = Depends(get_messaging_service)
) -> MessageResponse:
    message = await messaging_service.send_message(
        current_user,
        message_data.receiver_id,
        message_data.content,
        message_data.property_id
    )
    return MessageResponse.model_validate(message.to_dict())


@router.get(
    "/conversations",
    response_model=ConversationListResponse,
    summary="Conversation list",
    description="One entry per partner with the newest message and the unread count, newest first",
    responses=get_common_error_responses()
)
async def list_conversations(
    current_user: Profile = Depends(get_current_active_user),
    messaging_service: MessagingService = Depends(get_messaging_service)
) -> ConversationListResponse:
    conversations = await messaging_service.list_conversations(current_user)
    return ConversationListResponse.model_validate({"conversations": conversations})


@router.get(
    "/thread/{partner_id}",
    response_model=ThreadResponse,
    summary="Conversation thread",
    description="Messages with one partner, oldest first. Received messages are marked read.",
    responses=get_common_error_responses()
)
async def get_thread(
    partner_id: UUID = Path(..., description="Conversation partner ID"),
    current_user: Profile = Depends(get_current_active_user),
    messaging_service: MessagingService = Depends(get_messaging_service)
) -> ThreadResponse:
    thread = await messaging_service.get_thread(current_user, partner_id)
    return ThreadResponse.model_validate(thread)


@router.get(
    "/unread-count",
    response_model=UnreadCountResponse,
    summary="Unread message count",
    responses=get_common_error_responses()
)
async def unread_count(
    current_user: Profile = Depends(get_current_active_user),
    messaging_service: MessagingService = Depends(get_messaging_service)
) -> UnreadCountResponse:
    return UnreadCountResponse(unread_count=await messaging_service.unread_count(current_user))


async def _wait_for_disconnect(websocket: WebSocket) -> None:
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        return


@router.websocket("/ws")
async def message_feed(websocket: WebSocket, token: str = Query(...)):
    """
    Pushes {"event": "message", "message_id": ...} whenever the user receives
    a message. Clients re-fetch on each event.
    """
    try:
        user_id = uuid.UUID(verify_token(token, token_type="access").user_id)
    except (JWTError, ValueError):
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    logger.debug(f"Message feed opened for {user_id}")

    async with notifier.subscribe(user_id) as queue:
        disconnected = asyncio.create_task(_wait_for_disconnect(websocket))
        try:
            while True:
                next_event = asyncio.create_task(queue.get())
                done, _ = await asyncio.wait(
                    {next_event, disconnected},
                    return_when=asyncio.FIRST_COMPLETED
                )
                if disconnected in done:
                    next_event.cancel()
                    break
                await websocket.send_json(next_event.result())
        finally:
            disconnected.cancel()

    logger.debug(f"Message feed closed for {user_id}")
