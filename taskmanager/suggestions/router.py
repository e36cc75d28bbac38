from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from taskmanager.auth.dependencies import CurrentUser
from taskmanager.suggestions.schemas import SuggestRequest, SuggestResponse
from taskmanager.suggestions.service import (
    SuggestionService,
    SuggestionNotConfiguredError,
    SuggestionUnavailableError,
    SuggestionUpstreamError,
    SuggestionEmptyError,
    SuggestionParseError,
)


router = APIRouter(prefix="/api/tasks", tags=["Suggestions"])


def get_suggestion_service() -> SuggestionService:
    """Dependency to get suggestion service instance."""
    return SuggestionService()


@router.post(
    "/suggest",
    response_model=SuggestResponse,
    summary="Suggest subtasks for a task",
)
async def suggest_subtasks(
    request: SuggestRequest,
    current_user: CurrentUser,
    service: Annotated[SuggestionService, Depends(get_suggestion_service)],
) -> SuggestResponse:
    """Ask the AI service for 3-5 subtasks of the given task title."""
    try:
        suggestions = await service.suggest_subtasks(request.main_task_title)
    except SuggestionNotConfiguredError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="AI service not configured",
        )
    except SuggestionUpstreamError as e:
        return JSONResponse(
            status_code=e.status_code,
            content={"detail": f"Gemini API error: {e.reason}", "upstream": e.body},
        )
    except SuggestionUnavailableError:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="AI service unavailable",
        )
    except SuggestionEmptyError:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="No valid AI suggestions received",
        )
    except SuggestionParseError:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to parse AI suggestions",
        )

    return SuggestResponse(suggestions=suggestions)
