"""
Prometheus metrics middleware for API requests

Instruments all API requests with:
- Request count (by endpoint, method, status_code)
- Request duration (by endpoint, method)
"""

import time
from fastapi import Request

from server.metrics import metrics

# Path segments followed by an entity id
ID_PARENTS = {"questions": ":question_id"}


async def metrics_middleware(request: Request, call_next):
    """Record Prometheus metrics for all API requests"""
    start_time = time.time()

    endpoint = _normalize_endpoint(request.url.path)
    method = request.method

    try:
        response = await call_next(request)
    except Exception:
        metrics.api_requests.labels(endpoint=endpoint, method=method, status_code=500).inc()
        metrics.api_request_duration.labels(endpoint=endpoint, method=method).observe(
            time.time() - start_time
        )
        raise

    metrics.api_requests.labels(
        endpoint=endpoint,
        method=method,
        status_code=response.status_code
    ).inc()
    metrics.api_request_duration.labels(endpoint=endpoint, method=method).observe(
        time.time() - start_time
    )
    return response


def _normalize_endpoint(path: str) -> str:
    """Normalize endpoint path for metrics cardinality control

    Converts:
        /api/v1/questions/q_Zx81kPq0aW3s/results -> /api/v1/questions/:question_id/results
    """
    parts = [part for part in path.split('/') if part]
    normalized_parts = []

    for i, part in enumerate(parts):
        parent = parts[i - 1] if i > 0 else None
        if parent in ID_PARENTS:
            normalized_parts.append(ID_PARENTS[parent])
        else:
            normalized_parts.append(part)

    return '/' + '/'.join(normalized_parts)
