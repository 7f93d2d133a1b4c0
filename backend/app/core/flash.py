"""
One-shot flash messages carried across a redirect in the signed session.

A message is written by a mutation endpoint and consumed by the next listing
request; reading it removes it.
"""
from typing import Any, Dict, Optional

from starlette.requests import Request

FLASH_SESSION_KEY = "flash"


def flash_success(request: Request, message: str) -> None:
    request.session[FLASH_SESSION_KEY] = {"message": message}


def flash_error(request: Request, message: str) -> None:
    request.session[FLASH_SESSION_KEY] = {"isSuccess": False, "message": message}


def pop_flash(request: Request) -> Optional[Dict[str, Any]]:
    """Return the pending flash message, if any, and clear it."""
    return request.session.pop(FLASH_SESSION_KEY, None)
