"""
Monitoring and health check API routes
"""

from datetime import datetime
from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from config import config, get_logger
from database.store import SessionStore
from server.dependencies import get_store
from server.metrics import metrics, get_metrics_text

logger = get_logger(__name__)

router = APIRouter()

VERSION = "0.1.0"


@router.get("/")
async def root():
    """API status and info"""
    return {
        "service": "sondage API",
        "status": "running",
        "version": VERSION,
        "description": "Anonymous opinion polling with group statistics",
        "endpoints": {
            "participants": "POST /api/v1/participants - Issue an anonymous participant id",
            "questions": "GET /api/v1/questions?tags=&sort=date|importance|controversy",
            "create_question": "POST /api/v1/questions",
            "question": "GET|PATCH|DELETE /api/v1/questions/{id}",
            "respond": "PUT /api/v1/questions/{id}/responses",
            "my_response": "GET /api/v1/questions/{id}/responses/me",
            "results": "GET /api/v1/questions/{id}/results?policy=card|alignment",
            "group": "GET /api/v1/group?tags=",
            "health": "GET /api/health",
            "metrics": "GET /metrics",
        },
        "identity": "Send X-Participant-ID on every request that writes or personalizes",
    }


@router.get("/api/health")
async def health_check(store: SessionStore = Depends(get_store)):
    """Health check endpoint"""
    health_status: Dict[str, Any] = {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "version": VERSION,
        "checks": {},
    }

    store_stats = store.get_stats()
    metrics.update_store_size(store_stats)
    health_status["checks"]["store"] = {"status": "healthy", **store_stats}
    health_status["checks"]["configuration"] = {
        "status": "healthy",
        "is_development": config.is_development(),
    }

    return health_status


@router.get("/metrics")
async def prometheus_metrics():
    """Prometheus metrics in text exposition format"""
    return Response(content=get_metrics_text(), media_type="text/plain; version=0.0.4")
