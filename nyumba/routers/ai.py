"""
AI assistant endpoints: the chat passthrough, personal key settings and prompt suggestions.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status

from nyumba.models.user import Profile
from nyumba.schemas.assistant import (
    AISettingsResponse,
    AISettingsUpdate,
    AssistantRequest,
    AssistantResponse,
    SuggestionsResponse
)
from nyumba.schemas.error import get_common_error_responses, get_error_responses
from nyumba.services.assistant import AssistantService, get_suggestions
from nyumba.utils.dependencies import get_assistant_service, get_current_active_user, get_optional_current_user

router = APIRouter(prefix="/ai", tags=["AI Assistant"])


@router.post(
    "/assistant",
    response_model=AssistantResponse,
    status_code=status.HTTP_200_OK,
    summary="Ask the housing assistant",
    description=(
        "Send either a prompt with optional page context, or a chat history with "
        "includeProperties to ground answers in the latest available listings."
    ),
    responses=get_error_responses(422, 500)
)
async def ask_assistant(
    request: AssistantRequest,
    current_user: Optional[Profile] = Depends(get_optional_current_user),
    assistant_service: AssistantService = Depends(get_assistant_service)
) -> AssistantResponse:
    result = await assistant_service.ask(request, current_user)
    return AssistantResponse(result=result)


@router.get(
    "/settings",
    response_model=AISettingsResponse,
    summary="AI settings",
    responses=get_common_error_responses()
)
async def get_ai_settings(
    current_user: Profile = Depends(get_current_active_user),
    assistant_service: AssistantService = Depends(get_assistant_service)
) -> AISettingsResponse:
    return AISettingsResponse(**await assistant_service.get_settings(current_user))


@router.put(
    "/settings",
    response_model=AISettingsResponse,
    summary="Save personal Groq key",
    responses=get_common_error_responses()
)
async def update_ai_settings(
    settings_data: AISettingsUpdate,
    current_user: Profile = Depends(get_current_active_user),
    assistant_service: AssistantService = Depends(get_assistant_service)
) -> AISettingsResponse:
    return AISettingsResponse(**await assistant_service.update_settings(current_user, settings_data))


@router.delete(
    "/settings",
    response_model=AISettingsResponse,
    summary="Remove personal Groq key",
    responses=get_common_error_responses()
)
async def clear_ai_settings(
    current_user: Profile = Depends(get_current_active_user),
    assistant_service: AssistantService = Depends(get_assistant_service)
) -> AISettingsResponse:
    return AISettingsResponse(**await assistant_service.clear_settings(current_user))


@router.get("/suggestions", response_model=SuggestionsResponse, summary="Prompt suggestions")
async def prompt_suggestions(
    context_type: Optional[str] = Query(None, description="listing, tenant_match or move_cost")
) -> SuggestionsResponse:
    return SuggestionsResponse(context_type=context_type, suggestions=get_suggestions(context_type))
