"""Shared fixtures: settings environment, a temporary database and the API app."""

from __future__ import annotations

from pathlib import Path
from typing import Any, AsyncIterator

import httpx
import pytest

from jobboard.api.main import create_app
from jobboard.config.settings import get_settings
from jobboard.db.session import build_engine, build_session_factory, get_session, init_db

ADMIN_EMAIL = "admin@example.com"


@pytest.fixture(autouse=True)
def _setup_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("ADMIN_EMAILS", f"{ADMIN_EMAIL}, Lead@Example.com")
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'settings.db'}")
    monkeypatch.setenv("ADMIN_API_BASE_URL", "http://testserver")
    monkeypatch.setenv("ADMIN_API_EMAIL", ADMIN_EMAIL)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
async def engine(tmp_path: Path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'jobboard.db'}")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def api_app(engine):
    session_factory = build_session_factory(engine)
    app = create_app(get_settings())

    async def _session_override():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = _session_override
    return app


@pytest.fixture
def asgi_transport(api_app) -> httpx.ASGITransport:
    return httpx.ASGITransport(app=api_app)


@pytest.fixture
async def http(asgi_transport: httpx.ASGITransport) -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(transport=asgi_transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"X-Admin-Email": ADMIN_EMAIL}


def job_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "title": "Smart Contract Engineer",
        "company": "Blocklabs",
        "location": "Taipei",
        "job_type": "full-time",
        "job_level": "senior",
        "category": "engineering",
        "description": ["Build and audit Solidity contracts."],
        "requirements": "3+ years with EVM tooling",
        "company_email": "jobs@blocklabs.example",
        "is_remote": True,
    }
    payload.update(overrides)
    return payload


def application_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "name": "Mei Lin",
        "email": "mei@example.com",
        "student_status": "student",
        "school_name": "National Taiwan University",
        "major": "Computer Science",
        "telegram_id": "@meilin",
        "why_join": "To learn with builders.",
        "web3_interests": "DeFi",
        "skills_bringing": "Python, data analysis",
        "web3_journey": "Started with a hackathon.",
        "contribution_areas": ["research"],
        "how_know_us": ["friend"],
    }
    payload.update(overrides)
    return payload


async def submit_job(client: httpx.AsyncClient, **overrides: Any) -> dict[str, Any]:
    response = await client.post("/api/jobs", json=job_payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()["job"]


async def submit_application(client: httpx.AsyncClient, **overrides: Any) -> dict[str, Any]:
    response = await client.post("/api/applications", json=application_payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()["data"]
