"""
Request/response logging middleware
"""

import time
from fastapi import Request

from config import get_logger

logger = get_logger(__name__)


async def log_requests(request: Request, call_next):
    """Log one line per request with status and duration"""
    # Skip Prometheus scraping noise
    if request.url.path == "/metrics":
        return await call_next(request)

    start_time = time.time()
    participant = (request.headers.get("X-Participant-ID") or "anonymous")[:12]
    path_info = f"{request.method} {request.url.path}"

    try:
        response = await call_next(request)
    except Exception as e:
        duration = time.time() - start_time
        logger.error(
            f"{path_info} participant:{participant} → ERROR ({duration:.3f}s): {str(e)}"
        )
        raise

    duration = time.time() - start_time
    logger.info(
        f"{path_info} participant:{participant} → {response.status_code} ({duration:.3f}s)"
    )
    return response
