"""
FastAPI routes for signup and login.

Both accept either a JSON body or form-encoded fields:
    email, password
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from fastapi import APIRouter, Depends, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from intake.auth.service import AuthService


router = APIRouter(prefix="/api", tags=["auth"])


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth


def _as_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


async def _read_credentials(request: Request) -> Tuple[Optional[str], Optional[str]]:
    content_type = (request.headers.get("content-type") or "").lower()
    body: Any
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
    else:
        body = await request.form()
    return _as_str(body.get("email")), _as_str(body.get("password"))


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(request: Request, auth: AuthService = Depends(get_auth_service)) -> Any:
    """
    Register a new user.

    Response (201):
        { "message": "User created successfully." }
    """
    email, password = await _read_credentials(request)
    await run_in_threadpool(auth.signup, email, password)
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content={"message": "User created successfully."},
    )


@router.post("/login")
async def login(request: Request, auth: AuthService = Depends(get_auth_service)) -> Dict[str, str]:
    """
    Exchange credentials for a session token (valid for one hour by default).

    Response (200):
        { "token": "<jwt>" }
    """
    email, password = await _read_credentials(request)
    token = await run_in_threadpool(auth.login, email, password)
    return {"token": token}
