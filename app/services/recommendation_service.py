"""
AI Recommendation Service

Asks Claude to pick products for a shopper from their browsing history.
The model only chooses among the handles we send it; anything it invents
is dropped and the list is topped up from the catalog order.
"""
import json
import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

import anthropic

from app.core.config import settings
from app.core.exceptions import ConfigurationError, UpstreamServiceError
from app.domain.product import BrowsingHistoryItem, ProductSummary

logger = logging.getLogger(__name__)

# ============================================================================
# CONFIGURATION
# ============================================================================

RECOMMENDATION_COUNT = 4
DESCRIPTION_PREVIEW_CHARS = 100
MAX_TOKENS = 256
TEMPERATURE = 0.7

JSON_ARRAY_PATTERN = re.compile(r"\[[\s\S]*?\]")

SYSTEM_PROMPT = f"""You are an AI shopping assistant for a premium streetwear clothing brand called "A | M" (Aspire Manifest) based in Chicago. Your task is to analyze customer browsing patterns and recommend the most relevant products.

Guidelines:
- Recommend products that complement or match the style of items the customer has viewed
- Consider price ranges the customer seems interested in
- Prioritize variety while maintaining style coherence
- If no browsing history, recommend bestsellers or new arrivals
- Return exactly {RECOMMENDATION_COUNT} product handles that would be most appealing to this customer
- Only recommend products from the available list provided"""


def build_user_prompt(history: List[BrowsingHistoryItem], candidates: List[ProductSummary]) -> str:
    if history:
        viewed = "\n".join(f'{i}. "{item.title}" ({item.price})' for i, item in enumerate(history, 1))
        history_context = f"The customer has recently viewed these products:\n{viewed}"
    else:
        history_context = "The customer has no browsing history yet."

    listed = "\n".join(
        f'{i}. Handle: "{p.handle}" | Title: "{p.title}" | Price: {p.price} | '
        f'Description: {p.description[:DESCRIPTION_PREVIEW_CHARS]}...'
        for i, p in enumerate(candidates, 1)
    )

    return (
        f"{history_context}\n\n"
        f"Available products to recommend from:\n{listed}\n\n"
        f"Based on this customer's browsing behavior and preferences, recommend exactly "
        f"{RECOMMENDATION_COUNT} products from the available list. Return ONLY the product handles "
        f"as a JSON array, nothing else.\n\n"
        f'Example response format: ["product-handle-1", "product-handle-2", "product-handle-3", "product-handle-4"]'
    )


def parse_handles(content: str) -> Optional[List[str]]:
    """
    Strings of the first JSON array in the reply.

    Returns [] when the reply holds no array and None when the array
    does not parse.
    """
    match = JSON_ARRAY_PATTERN.search(content or "")
    if not match:
        return []

    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError:
        return None

    if not isinstance(parsed, list):
        return None
    return [item for item in parsed if isinstance(item, str)]


def finalize_recommendations(handles: List[str], candidates: List[ProductSummary],
                             count: int = RECOMMENDATION_COUNT) -> List[str]:
    """Keep known handles once each, then fill from the candidates in order"""
    available = [p.handle for p in candidates]
    known = set(available)

    chosen: List[str] = []
    for handle in handles:
        if handle in known and handle not in chosen:
            chosen.append(handle)

    for handle in available:
        if len(chosen) >= count:
            break
        if handle not in chosen:
            chosen.append(handle)

    return chosen[:count]


@dataclass
class RecommendationResult:
    """Result of one recommendation request"""
    recommendations: List[str]
    model: Optional[str] = None
    used_fallback: bool = False
    input_tokens: int = 0
    output_tokens: int = 0
    candidates: List[str] = field(default_factory=list)


# ============================================================================
# MAIN SERVICE CLASS
# ============================================================================

class RecommendationService:
    """Product recommendations from browsing history using Claude"""

    def __init__(self, client: Optional[anthropic.Anthropic] = None, model: Optional[str] = None):
        if client is None:
            api_key = settings.ANTHROPIC_API_KEY
            if not api_key:
                raise ConfigurationError("ANTHROPIC_API_KEY is not configured")
            client = anthropic.Anthropic(api_key=api_key)

        self.client = client
        self.model = model or settings.CLAUDE_MODEL

    def recommend(self, history: List[BrowsingHistoryItem], products: List[ProductSummary],
                  current_handle: Optional[str] = None) -> RecommendationResult:
        candidates = [p for p in products if p.handle != current_handle]
        if not candidates:
            return RecommendationResult(recommendations=[])

        logger.info(f"Recommending from {len(candidates)} products, {len(history)} viewed")

        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=MAX_TOKENS,
                temperature=TEMPERATURE,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": build_user_prompt(history, candidates)}]
            )
        except anthropic.RateLimitError as e:
            raise UpstreamServiceError("Rate limit exceeded, please try again later.", status_code=429) from e
        except anthropic.APIStatusError as e:
            if e.status_code == 402:
                raise UpstreamServiceError("AI credits depleted.", status_code=402) from e
            logger.error(f"Anthropic API error {e.status_code}: {e.message}")
            raise UpstreamServiceError(f"AI gateway error: {e.status_code}", status_code=500) from e
        except anthropic.APIConnectionError as e:
            logger.error(f"Anthropic connection error: {e}")
            raise UpstreamServiceError("AI gateway unavailable", status_code=500) from e

        text_content = ""
        for block in response.content:
            if hasattr(block, 'text'):
                text_content = block.text
                break

        handles = parse_handles(text_content)
        used_fallback = handles is None
        if used_fallback:
            logger.warning(f"Could not parse recommendations: {text_content[:200]}")
            handles = [p.handle for p in candidates[:RECOMMENDATION_COUNT]]

        return RecommendationResult(
            recommendations=finalize_recommendations(handles, candidates),
            model=self.model,
            used_fallback=used_fallback,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
            candidates=[p.handle for p in candidates]
        )


# ============================================================================
# SINGLETON INSTANCE
# ============================================================================

_service_instance: Optional[RecommendationService] = None


def get_recommendation_service() -> RecommendationService:
    """
    Get the singleton recommendation service instance.

    Raises:
        ConfigurationError: ANTHROPIC_API_KEY is not set
    """
    global _service_instance
    if _service_instance is None:
        _service_instance = RecommendationService()
    return _service_instance
