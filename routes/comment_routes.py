"""
Comment form endpoints.

GET  /comments/widget — reCAPTCHA widget markup for the comment form
POST /comments        — submit a comment; verified before it is stored
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from pydantic import ValidationError as PydanticValidationError

from config import AppSettings
from dependencies import get_comment_service, get_settings, get_widget_service
from errors import ValidationError
from schemas.dto.requests.comment import RECAPTCHA_RESPONSE_FIELD, CommentCreateRequest
from schemas.dto.responses.comment import CommentResponse
from schemas.dto.responses.common import ErrorResponse
from services.comment_service import CommentService
from services.widget_service import WidgetService
from shared.ip_utils import get_client_ip

router = APIRouter(prefix="/comments", tags=["comments"])


@router.get("/widget", response_class=HTMLResponse)
async def comment_widget(
    widget: WidgetService = Depends(get_widget_service),
) -> HTMLResponse:
    return HTMLResponse(await widget.render())


@router.post(
    "",
    status_code=201,
    response_model=CommentResponse,
    responses={400: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
async def create_comment(
    request: Request,
    post_id: str = Form(default=""),
    author: str = Form(default=""),
    email: Optional[str] = Form(default=None),
    content: str = Form(default=""),
    recaptcha_token: Optional[str] = Form(
        default=None, alias=RECAPTCHA_RESPONSE_FIELD
    ),
    service: CommentService = Depends(get_comment_service),
    settings: AppSettings = Depends(get_settings),
) -> CommentResponse:
    try:
        payload = CommentCreateRequest(
            post_id=post_id, author=author, email=email, content=content
        )
    except PydanticValidationError as e:
        first = e.errors()[0]
        loc = first.get("loc") or ()
        raise ValidationError(
            first.get("msg", "Invalid comment"),
            field=str(loc[-1]) if loc else None,
        ) from e

    remote_address = get_client_ip(request, settings.trust_proxy_headers)
    doc = await service.submit(payload, recaptcha_token, remote_address)
    return CommentResponse.from_doc(doc)
