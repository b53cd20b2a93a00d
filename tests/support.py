"""Shared base class for API tests: fresh store per test, helpers for users and tokens."""

import unittest

from fastapi.testclient import TestClient

from app.core.database import SessionLocal, reset_store
from app.core.security import create_access_token
from app.main import app
from app.schemas.roles import Role
from app.services.users import create_user


class ApiTestCase(unittest.TestCase):
    """Each test starts with an empty in-memory store."""

    def setUp(self) -> None:
        reset_store()
        self.client = TestClient(app)

    def make_user(self, username: str, role: Role = Role.USER, password: str = "secret1") -> dict:
        """Insert a user directly and return {id, username, role, headers}."""
        db = SessionLocal()
        try:
            user = create_user(db, username, password, role=role)
            user_id = user.id
        finally:
            db.close()
        token = create_access_token(user_id=user_id, username=username, role=role.value)
        return {
            "id": user_id,
            "username": username,
            "role": role.value,
            "token": token,
            "headers": {"Authorization": f"Bearer {token}"},
        }

    def post_tweet(self, user: dict, content: str = "hello world") -> dict:
        response = self.client.post("/api/tweets", json={"content": content}, headers=user["headers"])
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()
