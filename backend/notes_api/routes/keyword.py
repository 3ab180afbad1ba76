"""
Notes API — Keyword Proxy Route
=================================

What:  GET /say?keyword=... forwards to the remote keyword function.
How:   The keyword must be present and non-empty (else 400). The remote's
       status code, body and content type are relayed as-is. If the remote
       cannot be reached, the error handler answers 500.
"""

import logging

from fastapi import APIRouter, Query, Response

from notes_api.schemas.note import ErrorResponse
from notes_api.services.keyword_service import keyword_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Keyword"])


@router.get(
    "/say",
    responses={
        400: {"description": "Missing keyword", "model": ErrorResponse},
        500: {"description": "Keyword function unreachable", "model": ErrorResponse},
    },
    summary="Relay a keyword to the remote keyword function",
)
async def say(
    keyword: str = Query(..., min_length=1, description="Keyword to forward"),
) -> Response:
    upstream = await keyword_service.say(keyword)
    return Response(
        content=upstream.content,
        status_code=upstream.status_code,
        media_type=upstream.headers.get("content-type", "application/json"),
    )
