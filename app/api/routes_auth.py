"""
Admin sign-in - issues the cookie the admin pages authenticate with
"""

import logging

from fastapi import APIRouter, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from app.core.templating import templates
from app.utils.security import ADMIN_COOKIE, is_admin_token

logger = logging.getLogger(__name__)

router = APIRouter()

LISTING_URL = "/admin/event-registration"
INVALID_TOKEN_MESSAGE = "The admin token is not valid."

@router.get("/login", response_class=HTMLResponse)
def login_page(request: Request):
    """Token sign-in form"""
    return templates.TemplateResponse(request, "admin/login.html", {"error_message": None})

@router.post("/login")
def login(request: Request, token: str = Form("")):
    """Check the token and store it in an HTTP-only cookie"""
    token = token.strip()
    if not is_admin_token(token):
        logger.warning("Rejected admin sign-in from %s", request.client.host)
        return templates.TemplateResponse(
            request, "admin/login.html", {"error_message": INVALID_TOKEN_MESSAGE},
            status_code=status.HTTP_401_UNAUTHORIZED
        )

    response = RedirectResponse(url=LISTING_URL, status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(ADMIN_COOKIE, token, httponly=True, samesite="lax", path="/admin")
    return response

@router.post("/logout")
def logout():
    """Drop the admin cookie"""
    response = RedirectResponse(url="/admin/login", status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(ADMIN_COOKIE, path="/admin")
    return response
