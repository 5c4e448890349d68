# app/middleware/auth_middleware.py
import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, RedirectResponse

from app.core.config import settings
from app.core.security import token_from_request

logger = logging.getLogger(__name__)

PROTECTED_PREFIX = "/api/contacts"
LOGIN_PATH = "/login"
DASHBOARD_PATH = "/dashboard"


class RouteGuardMiddleware(BaseHTTPMiddleware):
    """Turns away requests by token presence only.

    Contact API calls without any token get a 401 before routing, and an
    already logged-in browser hitting the login page is sent to the dashboard.
    Signature and expiry are checked later by the auth dependency.
    """

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        cookie = request.cookies.get(settings.AUTH_COOKIE_NAME)
        token = token_from_request(request.headers.get("Authorization"), cookie)

        if path.startswith(PROTECTED_PREFIX) and not token:
            logger.debug("Rejected unauthenticated request to %s", path)
            return JSONResponse(status_code=401, content={"detail": {"error": "Not authenticated."}})

        if path == LOGIN_PATH and cookie:
            return RedirectResponse(url=DASHBOARD_PATH)

        response = await call_next(request)
        return response
