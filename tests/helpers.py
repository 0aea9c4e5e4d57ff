"""Request helpers shared by the endpoint tests."""

from fastapi.testclient import TestClient

T0 = 1_700_000_000_000  # 2023-11-14T22:13:20Z in epoch milliseconds


def register(client: TestClient, full_name: str, email: str, password: str = "s3cret-pass") -> dict[str, str]:
    """Create an account and return bearer auth headers for it."""
    response = client.post(
        "/create-account",
        json={"fullName": full_name, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['accessToken']}"}


def story_payload(**overrides) -> dict:
    payload = {
        "title": "Summer in Paris",
        "story": "Croissants every morning.",
        "visitedLocation": ["Paris"],
        "imageUrl": "http://testserver/uploads/paris.jpg",
        "visitDate": str(T0),
    }
    payload.update(overrides)
    return payload


def add_story(client: TestClient, headers: dict[str, str], **overrides) -> dict:
    response = client.post("/add-travel-story", json=story_payload(**overrides), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["story"]
