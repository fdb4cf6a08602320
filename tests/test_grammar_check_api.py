from fastapi.testclient import TestClient

from services.grammar_check.app import app

client = TestClient(app)

REPLY = {
    "suggestions": [
        {
            "original": "I is",
            "suggestion": "I am",
            "explanation": "subject-verb agreement",
            "startIndex": 0,
            "endIndex": 4,
        }
    ],
    "detectedLanguage": "English",
    "processedText": "I am happy",
}


def test_health_check_is_public():
    response = client.get("/health")
    assert response.status_code == 200
    assert "healthy" in response.json()["message"].lower()


def test_requires_authentication():
    response = client.post("/api/check-grammar", json={"text": "I is happy", "style": "formal"})
    assert response.status_code == 401


def test_check_grammar_success(auth_headers, stub_driver, db_session, test_user):
    stub_driver.reply_with(REPLY, prefix="Sure! ")

    response = client.post(
        "/api/check-grammar", json={"text": "I is happy", "style": "formal"}, headers=auth_headers
    )

    assert response.status_code == 200
    assert response.json() == REPLY
    db_session.refresh(test_user)
    assert test_user.checks_performed == 1


def test_invalid_body_returns_field_details(auth_headers, stub_driver):
    response = client.post("/api/check-grammar", json={"text": "", "style": "formal"}, headers=auth_headers)

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid request data"
    assert any("text" in detail["loc"] for detail in body["details"])
    assert stub_driver.calls == []


def test_unknown_style_is_rejected(auth_headers):
    response = client.post("/api/check-grammar", json={"text": "hello", "style": "pirate"}, headers=auth_headers)
    assert response.status_code == 400


def test_text_over_limit_is_rejected(auth_headers):
    response = client.post(
        "/api/check-grammar", json={"text": "a" * 5001, "style": "formal"}, headers=auth_headers
    )
    assert response.status_code == 400


def test_malformed_model_reply_is_generic_failure(auth_headers, stub_driver, db_session, test_user):
    stub_driver.reply = "Sorry, I cannot process this."

    response = client.post(
        "/api/check-grammar", json={"text": "I is happy", "style": "formal"}, headers=auth_headers
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error", "error_code": "malformed_model_response"}
    db_session.refresh(test_user)
    assert test_user.checks_performed == 0


def test_provider_failure_does_not_leak_detail(auth_headers, stub_driver):
    stub_driver.error = RuntimeError("api key sk-secret rejected")

    response = client.post(
        "/api/check-grammar", json={"text": "I is happy", "style": "casual"}, headers=auth_headers
    )

    assert response.status_code == 500
    assert response.json()["error_code"] == "external_service_error"
    assert "sk-secret" not in response.text


def test_writing_styles(auth_headers):
    response = client.get("/api/check-grammar/styles", headers=auth_headers)

    assert response.status_code == 200
    styles = [item["style"] for item in response.json()]
    assert styles == ["formal", "casual", "informal", "gen-z", "academic"]
