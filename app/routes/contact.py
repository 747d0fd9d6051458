"""
Contact form intake.

  POST /api/contact
    Accepts JSON or form-encoded { name, email, subject, message }.
    Nothing is validated: missing fields are stored as absent and the
    response always reports success.
"""
import json
import logging

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException

from app.dependencies import get_analytics
from app.schemas.response import ContactRequest, ContactResponse
from app.services.state import AnalyticsState

logger = logging.getLogger(__name__)

router = APIRouter(tags=["contact"])

_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def _read_payload(request: Request) -> dict:
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith(_FORM_TYPES):
        try:
            form = await request.form()
        except (HTTPException, MultiPartException) as exc:
            logger.warning("Contact form body could not be parsed (%s); storing empty message", exc)
            return {}
        return dict(form)

    raw = await request.body()
    if not raw:
        return {}
    try:
        payload = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError):
        logger.warning("Contact body is not JSON (%d bytes); storing empty message", len(raw))
        return {}
    return payload if isinstance(payload, dict) else {}


def _parse_contact(payload: dict) -> ContactRequest:
    try:
        return ContactRequest.model_validate(payload)
    except ValidationError:
        # Drop fields that are not plain scalars, keep the rest
        cleaned = {
            k: v for k, v in payload.items()
            if k in ContactRequest.model_fields
            and isinstance(v, (str, int, float))
            and not isinstance(v, bool)
        }
        return ContactRequest.model_validate(cleaned)


@router.post("/api/contact", response_model=ContactResponse)
async def submit_contact(
    request: Request,
    analytics: AnalyticsState = Depends(get_analytics),
) -> ContactResponse:
    """Store a contact-form submission at the head of the message log."""
    body = _parse_contact(await _read_payload(request))
    analytics.messages.submit(
        name=body.name,
        email=body.email,
        subject=body.subject,
        body=body.message,
    )
    return ContactResponse()
