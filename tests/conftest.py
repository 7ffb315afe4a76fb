# tests/conftest.py

from __future__ import annotations

import json

import pytest

from app import create_app
from config import Settings
from utils.session_store import SESSION_KEY

from .fakes import FakeSupabaseClient


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        supabase_url='https://example.supabase.co',
        supabase_key='test-key',
        secret_key='test-secret',
        request_timeout=1.0,
        log_level='WARNING',
        port=5001,
        debug=False,
    )


@pytest.fixture()
def fake_client() -> FakeSupabaseClient:
    return FakeSupabaseClient()


@pytest.fixture()
def app(settings, fake_client):
    app = create_app(settings, client=fake_client)
    app.config['TESTING'] = True
    return app


@pytest.fixture()
def http(app):
    return app.test_client()


@pytest.fixture()
def login_as(http):
    """Put a session record in the cookie session, as a successful login would."""

    def _login(user_id='u-1', full_name='Amy', role='stylist'):
        with http.session_transaction() as sess:
            sess[SESSION_KEY] = json.dumps({'id': user_id, 'full_name': full_name, 'role': role})

    return _login
