# tests/helpers.py
"""Small request helpers shared by the API tests"""

from datetime import date, timedelta


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def register_user(client, name: str, email: str, password: str):
    response = client.post(
        "/auth/register",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    body = response.json()
    return body["user"], body["token"]


def create_task(client, token: str, **fields) -> dict:
    payload = {"title": "Task", "due_date": "2099-01-01"}
    payload.update(fields)
    response = client.post("/tasks", json=payload, headers=auth_headers(token))
    assert response.status_code == 201, response.text
    return response.json()["task"]


def days_from_now(days: int) -> str:
    return (date.today() + timedelta(days=days)).isoformat()
