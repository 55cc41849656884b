import secrets

from fastapi import HTTPException, Header
from miniparty.core.config import settings
from miniparty.core.logger import logger

async def verify_admin_token(x_admin_token: str = Header(None)):
    """
    Verify the admin token from the X-Admin-Token header.
    A missing ADMIN_SECRET is a server misconfiguration (500), a missing
    or wrong token is the caller's fault (401).
    """
    secret = settings.ADMIN_SECRET
    if not secret:
        logger.error("❌ ADMIN_SECRET is not set, refusing admin request")
        raise HTTPException(status_code=500, detail="Admin access is not configured")

    if not x_admin_token or not secrets.compare_digest(x_admin_token.encode(), secret.encode()):
        logger.warning("⚠️ Rejected admin request with missing or invalid token")
        raise HTTPException(status_code=401, detail="Unauthorized")

    return True
