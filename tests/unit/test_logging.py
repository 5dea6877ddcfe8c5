"""Tests for structlog configuration and request context."""

import logging

import pytest
import structlog

from storefront.logging import QUIET_LOGGERS, clear_request_context, setup_logging


@pytest.fixture
def reset_structlog():
    yield
    clear_request_context()
    structlog.reset_defaults()


class TestSetupLogging:
    def test_production_renders_json_with_context(self, reset_structlog):
        setup_logging(debug=False)

        processors = structlog.get_config()["processors"]
        assert processors[0] is structlog.contextvars.merge_contextvars
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_debug_renders_console(self, reset_structlog):
        setup_logging(debug=True)

        assert isinstance(structlog.get_config()["processors"][-1], structlog.dev.ConsoleRenderer)

    def test_driver_loggers_quieted(self, reset_structlog):
        setup_logging(debug=True)

        for name in QUIET_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING


class TestRequestContext:
    @pytest.mark.asyncio
    async def test_authenticated_user_bound(self, core, reset_structlog):
        await core.services.auth.register("alice", "p1", "p1", None)
        user = await core.services.auth.login("alice", "p1", "pytest")
        session = await core.services.session.create_session(user)

        await core.services.access.ensure_authenticated(session.auth_token)

        assert structlog.contextvars.get_contextvars()["user_name"] == "alice"

    def test_clear_request_context(self, reset_structlog):
        structlog.contextvars.bind_contextvars(user_name="alice")

        clear_request_context()

        assert structlog.contextvars.get_contextvars() == {}
