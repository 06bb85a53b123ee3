"""AI chat routing endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from sellergenix.core.metrics import ai_queries_routed_total
from sellergenix.domain.ai.query_router import DEEP_MODEL, classify_query
from sellergenix.web.deps import AppSettings
from sellergenix.web.schemas import QueryIn, QueryRouteOut

router = APIRouter()


@router.post("/classify", response_model=QueryRouteOut)
def classify_chat_query(body: QueryIn, settings: AppSettings) -> QueryRouteOut:
    """Pick the model tier for a dashboard chat question."""
    result = classify_query(body.query, long_query_chars=settings.ai_long_query_chars)
    ai_queries_routed_total.labels(model=result.model).inc()

    model_id = settings.ai_deep_model if result.model == DEEP_MODEL else settings.ai_fast_model
    return QueryRouteOut(
        tier=result.model,
        model=model_id,
        confidence=result.confidence,
        reason=result.reason,
    )
