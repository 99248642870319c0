"""
API tests for AI recommendations

The service factory is patched; the Anthropic SDK is never called.
"""
from unittest.mock import MagicMock, patch

import pytest

from app.core.exceptions import ConfigurationError, UpstreamServiceError
from app.services.recommendation_service import RecommendationResult

URL = "/api/v1/recommendations"

BODY = {
    "browsingHistory": [{"handle": "founders-hoodie", "title": "Founders Series Hoodie", "price": "$85.00"}],
    "allProducts": [
        {"handle": "founders-hoodie", "title": "Founders Series Hoodie", "description": "", "price": "$85.00"},
        {"handle": "hope-tee", "title": "Hope V1 Tee", "description": "", "price": "$40.00"},
        {"handle": "am-cap", "title": "A | M Cap", "description": "", "price": "$30.00"},
    ],
    "currentProductHandle": "founders-hoodie",
}


@pytest.fixture
def service():
    service = MagicMock()
    with patch("app.api.recommendations.get_recommendation_service", return_value=service):
        yield service


def test_returns_recommendations(client, service):
    service.recommend.return_value = RecommendationResult(recommendations=["hope-tee", "am-cap"])

    response = client.post(URL, json=BODY)

    assert response.status_code == 200
    assert response.json() == {"recommendations": ["hope-tee", "am-cap"]}
    history, products = service.recommend.call_args[0]
    assert [item.handle for item in history] == ["founders-hoodie"]
    assert service.recommend.call_args.kwargs["current_handle"] == "founders-hoodie"


def test_snake_case_body(client, service):
    service.recommend.return_value = RecommendationResult(recommendations=["am-cap"])
    body = {
        "browsing_history": [],
        "all_products": [{"handle": "am-cap", "title": "A | M Cap"}],
    }

    assert client.post(URL, json=body).json() == {"recommendations": ["am-cap"]}


def test_no_candidates_skips_the_model(client, service):
    body = dict(BODY, allProducts=BODY["allProducts"][:1])

    response = client.post(URL, json=body)

    assert response.json() == {"recommendations": []}
    service.recommend.assert_not_called()


@pytest.mark.parametrize("error, status_code, message", [
    (UpstreamServiceError("Rate limit exceeded, please try again later.", status_code=429), 429,
     "Rate limit exceeded, please try again later."),
    (UpstreamServiceError("AI credits depleted.", status_code=402), 402, "AI credits depleted."),
    (UpstreamServiceError("AI gateway error: 503", status_code=500), 500, "AI gateway error: 503"),
    (ConfigurationError("ANTHROPIC_API_KEY is not configured"), 500, "ANTHROPIC_API_KEY is not configured"),
])
def test_errors_keep_empty_recommendations(client, service, error, status_code, message):
    service.recommend.side_effect = error

    response = client.post(URL, json=BODY)

    assert response.status_code == status_code
    assert response.json() == {"error": message, "recommendations": []}


def test_unexpected_error(client, service):
    service.recommend.side_effect = RuntimeError("boom")

    response = client.post(URL, json=BODY)

    assert response.status_code == 500
    assert response.json()["recommendations"] == []
