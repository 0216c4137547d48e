"""
Tests for the onboarding preferences endpoints.
"""


def test_preferences_default_before_first_write(auth_client):
    response = auth_client.get("/api/preferences")

    assert response.status_code == 200
    assert response.json() == {"onboardingComplete": False}


def test_save_and_read_preferences(auth_client):
    response = auth_client.post("/api/preferences", json={"intent": "interview", "onboardingComplete": True})

    assert response.status_code == 200
    saved = response.json()
    assert saved["intent"] == "interview"
    assert saved["onboardingComplete"] is True

    fetched = auth_client.get("/api/preferences").json()
    assert fetched["intent"] == "interview"
    assert fetched["onboardingComplete"] is True
    assert fetched["userId"] == saved["userId"]


def test_partial_update_keeps_other_fields(auth_client):
    auth_client.post("/api/preferences", json={"intent": "sales", "onboardingComplete": True})

    response = auth_client.post("/api/preferences", json={"intent": "coaching"})

    assert response.json()["intent"] == "coaching"
    assert response.json()["onboardingComplete"] is True


def test_first_write_without_flag_is_not_onboarded(auth_client):
    response = auth_client.post("/api/preferences", json={"intent": "presentation"})

    assert response.json()["onboardingComplete"] is False


def test_preferences_require_authentication(client):
    assert client.get("/api/preferences").status_code == 401
    assert client.post("/api/preferences", json={"intent": "interview"}).status_code == 401
