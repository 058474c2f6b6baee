"""Reading Routes — recommend, draw and interpret, archive, feedback, follow-up chat.

Invariants:
    - Recommend, create, and chat need an API key; archive reads do not
    - Unknown spread ids → 400 UNKNOWN_SPREAD; unknown reading ids → 404
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from lucid.schemas.readings import (
    ChatRequest, ChatResponse, DrawReadingRequest, FeedbackUpdate,
    ReadingListResponse, RecommendRequest, RecommendResponse,
)
from lucid.core.records import ReadingSession
from lucid.services.reading_archive import ReadingArchive
from lucid.services.reading_flow import ReadingFlow
from lucid.api.dependencies import get_archive, get_reading_flow, require_api_key

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/readings", tags=["readings"])


@router.post(
    "/recommend", response_model=RecommendResponse,
    dependencies=[Depends(require_api_key)],
)
async def recommend_spreads(
    body: RecommendRequest, flow: ReadingFlow = Depends(get_reading_flow),
):
    return RecommendResponse(spread_ids=await flow.recommend(body.question))


@router.post(
    "", response_model=ReadingSession,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_api_key)],
)
async def create_reading(
    body: DrawReadingRequest, flow: ReadingFlow = Depends(get_reading_flow),
):
    return await flow.create_reading(
        body.question, body.spread_id, body.indices, body.element_indices,
    )


@router.get("", response_model=ReadingListResponse)
async def list_readings(
    search: str | None = Query(None, max_length=200),
    archive: ReadingArchive = Depends(get_archive),
):
    sessions = await archive.list_sessions(search)
    return ReadingListResponse(sessions=sessions, total=len(sessions))


@router.get("/{session_id}", response_model=ReadingSession)
async def get_reading(
    session_id: str, archive: ReadingArchive = Depends(get_archive),
):
    return await archive.get(session_id)


@router.put("/{session_id}/feedback", response_model=ReadingSession)
async def set_feedback(
    session_id: str,
    body: FeedbackUpdate,
    archive: ReadingArchive = Depends(get_archive),
):
    return await archive.set_feedback(session_id, body.feedback)


@router.post(
    "/{session_id}/chat", response_model=ChatResponse,
    dependencies=[Depends(require_api_key)],
)
async def chat_about_reading(
    session_id: str,
    body: ChatRequest,
    flow: ReadingFlow = Depends(get_reading_flow),
):
    reply, session = await flow.chat(session_id, body.message)
    return ChatResponse(reply=reply, session=session)
