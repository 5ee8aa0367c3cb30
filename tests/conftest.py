"""Shared fixtures: a fresh store and a fresh app per test."""
import pytest
from fastapi.testclient import TestClient

from string_analyzer.config import Settings
from string_analyzer.database import StringStore
from string_analyzer.main import create_app


@pytest.fixture
def store() -> StringStore:
    return StringStore()


@pytest.fixture
def app():
    return create_app(Settings())


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
