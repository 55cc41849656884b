from typing import Any, Dict, List

import requests

from miniparty.core.logger import logger

class AdminClientError(Exception):
    pass

class AdminAuthError(AdminClientError):
    pass

def fetch_bookings(api_url: str, token: str, timeout: int = 10) -> List[Dict[str, Any]]:
    """
    Fetches all bookings from the API using the admin token.
    Raises AdminAuthError on 401 and AdminClientError on any other failure.
    """
    url = f"{api_url.rstrip('/')}/bookings"
    try:
        response = requests.get(url, headers={"X-Admin-Token": token}, timeout=timeout)
    except requests.RequestException as e:
        logger.error(f"❌ Admin dashboard could not reach {url}: {e}")
        raise AdminClientError("Could not connect to server.") from e

    if response.status_code == 401:
        raise AdminAuthError("Invalid token. Access denied.")
    if not response.ok:
        logger.error(f"❌ Admin dashboard got {response.status_code} from {url}")
        raise AdminClientError("Failed to fetch bookings.")

    try:
        return response.json() or []
    except ValueError as e:
        logger.error(f"❌ Admin dashboard got a non-JSON body from {url}: {e}")
        raise AdminClientError("Failed to fetch bookings.") from e

def summarize(bookings: List[Dict[str, Any]]) -> Dict[str, int]:
    return {
        "total_bookings": len(bookings),
        "total_guests": sum(b.get("guests", 0) for b in bookings),
    }
