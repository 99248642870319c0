"""
AI Recommendations API

Endpoint:
- POST /api/v1/recommendations - Pick 4 products for the shopper
"""
import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.core.exceptions import StorefrontError
from app.domain.product import RecommendationRequest, RecommendationResponse
from app.services.recommendation_service import get_recommendation_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/recommendations", tags=["Recommendations"])


def _error(message: str, status_code: int) -> JSONResponse:
    # The web client always reads `recommendations`, even on failure
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "recommendations": []}
    )


@router.post("", response_model=RecommendationResponse)
def recommend(request: RecommendationRequest):
    """
    Recommend products from the shopper's browsing history.

    The current product is never recommended. With nothing left to choose
    from the model is not called.
    """
    candidates = [p for p in request.all_products if p.handle != request.current_product_handle]
    if not candidates:
        return {"recommendations": []}

    try:
        service = get_recommendation_service()
        result = service.recommend(
            request.browsing_history,
            request.all_products,
            current_handle=request.current_product_handle
        )
    except StorefrontError as e:
        if e.status_code in (402, 429):
            return _error(e.message, e.status_code)
        logger.error(f"Recommendation error: {e.message}")
        return _error(e.message, 500)
    except Exception as e:
        logger.error(f"Unexpected recommendation error: {e}", exc_info=True)
        return _error("Unknown error", 500)

    logger.info(
        f"Recommended {len(result.recommendations)} products "
        f"(fallback={result.used_fallback}, tokens={result.input_tokens}+{result.output_tokens})"
    )
    return {"recommendations": result.recommendations}
