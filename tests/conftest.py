# tests/conftest.py

import os
import sys

# Add the project root (the folder containing `skintriage/`) to sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# Settings are read at import time, so seed them before the app is imported
os.environ.setdefault("SUPABASE_URL", "https://project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "anon-test-key")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("OPENAI_API_KEY", "sk-test")

import pytest
from fastapi.testclient import TestClient

from skintriage.core.jwt import create_jwt_token
from skintriage.main import app

TEST_USER_ID = "user-123"


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def access_token():
    return create_jwt_token({"sub": TEST_USER_ID})


@pytest.fixture
def auth_headers(access_token):
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture
def image_url():
    return (
        "https://project.supabase.co/storage/v1/object/sign/medical-images/"
        f"{TEST_USER_ID}/1700000000000.jpg?token=signed-token"
    )
