"""
Security utilities and authentication
"""

from fastapi import HTTPException, Depends, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional
import secrets
import time
from collections import defaultdict

from app.core.config import settings

# Simple in-memory rate limiter
rate_limiter = defaultdict(list)

security = HTTPBearer(auto_error=False)

ADMIN_COOKIE = "admin_token"

def is_admin_token(token: Optional[str]) -> bool:
    """Constant-time comparison against the configured admin token"""
    if not token:
        return False
    return secrets.compare_digest(token, settings.ADMIN_TOKEN)

def verify_admin_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
):
    """Verify admin authentication token.

    Browsers on the admin pages send the token as the cookie issued by
    ``/admin/login``; API clients use the bearer header.
    """
    token = credentials.credentials if credentials else request.cookies.get(ADMIN_COOKIE)
    if not is_admin_token(token):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin token"
        )
    return token

def rate_limit_check(client_ip: str, limit: int = None) -> bool:
    """Simple rate limiting by IP address"""
    if limit is None:
        limit = settings.RATE_LIMIT_PER_MINUTE

    current_time = time.time()
    minute_ago = current_time - 60

    # Forget addresses with no requests in the last minute
    for ip in [ip for ip, times in rate_limiter.items() if not times or times[-1] <= minute_ago]:
        del rate_limiter[ip]

    recent = [req_time for req_time in rate_limiter.get(client_ip, []) if req_time > minute_ago]
    if len(recent) >= limit:
        rate_limiter[client_ip] = recent
        return False

    recent.append(current_time)
    rate_limiter[client_ip] = recent
    return True

def get_client_ip(request) -> str:
    """Extract client IP from request"""
    # Proxy headers are client-controlled unless a trusted proxy sets them
    if settings.TRUST_PROXY_HEADERS:
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip

    return request.client.host
