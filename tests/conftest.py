"""Test fixtures for the scanlink application."""

import os
import tempfile

# Settings are read at import time, so the environment is prepared first
_TEST_DIR = tempfile.mkdtemp(prefix="scanlink-tests-")
os.environ["ENVIRONMENT"] = "testing"
os.environ["DEBUG"] = "false"
os.environ["LOG_DIR"] = os.path.join(_TEST_DIR, "logs")
os.environ["DATABASE_PATH"] = os.path.join(_TEST_DIR, "default.sqlite")
os.environ["STORAGE_BACKEND"] = "sqlite"
os.environ["REMOTE_DATABASE_URL"] = ""
os.environ["SHORT_URL_DOMAIN"] = "http://testserver"

from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient

from scanlink.main import create_app
from scanlink.services.id_generator import IdGenerator
from scanlink.storage.sql import SQLiteStorage


@pytest_asyncio.fixture
async def storage(tmp_path) -> AsyncGenerator[SQLiteStorage, None]:
    """Initialized SQLite storage backed by a fresh file."""
    backend = SQLiteStorage(path=str(tmp_path / "test.sqlite"))
    await backend.initialize()
    
    yield backend
    
    await backend.close()


@pytest.fixture
def id_generator() -> IdGenerator:
    return IdGenerator()


@pytest.fixture
def test_app(tmp_path) -> FastAPI:
    """Create the application over its own SQLite file.

    The storage is initialized by the startup event, inside the
    TestClient's event loop.
    """
    return create_app(storage=SQLiteStorage(path=str(tmp_path / "api.sqlite")))


@pytest.fixture
def client(test_app) -> Generator[TestClient, None, None]:
    """Return FastAPI TestClient instance."""
    with TestClient(test_app) as test_client:
        yield test_client
