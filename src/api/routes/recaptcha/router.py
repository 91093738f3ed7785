"""Endpoint de diagnóstico do reCAPTCHA (POST /api/test-recaptcha)."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request

from api.routes.common import read_json_body
from api.validators.checkout import validate_recaptcha_request
from app.bootstrap.dependencies import get_recaptcha_client

router = APIRouter()


@router.post("/test-recaptcha")
async def verify_recaptcha_token(
    request: Request,
    recaptcha=Depends(get_recaptcha_client),
) -> dict[str, Any]:
    token = validate_recaptcha_request(await read_json_body(request))
    details = await recaptcha.verify(token)
    return {"success": True, "message": "reCAPTCHA validado com sucesso!", "details": details}
