"""Tests for API health endpoint behavior.

These tests validate deterministic response behavior for available and
missing interpreter states.
"""

from fastapi.testclient import TestClient

from obfuscator.adapters import INTERPRETER_NOT_FOUND_MESSAGE, InterpreterNotFoundError
from obfuscator.api.application import create_api_application
from obfuscator.config import AppSettings
from obfuscator.domain import HealthStatus


class _ReadyOrchestratorStub:
    """Test double that simulates a resolved interpreter."""

    def job_interpreter_status(self) -> HealthStatus:
        """Return deterministic interpreter health.

        Returns:
            HealthStatus: Resolved interpreter status.

        Raises:
            InterpreterNotFoundError: Never raised by this test double.
        """

        return HealthStatus(status="ok", detail="/usr/bin/lua5.1")

    def job_submit(self, source_text: object, tier: object):
        raise AssertionError("job_submit is not used by health tests")


class _MissingInterpreterOrchestratorStub:
    """Test double that simulates a missing interpreter."""

    def job_interpreter_status(self) -> HealthStatus:
        """Raise deterministic interpreter lookup error.

        Returns:
            HealthStatus: This method does not return.

        Raises:
            InterpreterNotFoundError: Always raised by this test double.
        """

        raise InterpreterNotFoundError(INTERPRETER_NOT_FOUND_MESSAGE)

    def job_submit(self, source_text: object, tier: object):
        raise AssertionError("job_submit is not used by health tests")


def test_api_health_returns_success_when_interpreter_is_available() -> None:
    """Return HTTP 200 and healthy payload when the interpreter resolves.

    Returns:
        None: Assertions validate response behavior.

    Raises:
        AssertionError: Raised when response does not match expected payload.
    """

    client = TestClient(create_api_application(AppSettings(environment_name="test"), _ReadyOrchestratorStub()))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["interpreter"] == "ok"
    assert response.json()["detail"] == "/usr/bin/lua5.1"


def test_api_health_returns_service_unavailable_when_interpreter_is_missing() -> None:
    """Return HTTP 503 and degraded payload when no interpreter resolves.

    Returns:
        None: Assertions validate response behavior.

    Raises:
        AssertionError: Raised when response does not match expected payload.
    """

    client = TestClient(
        create_api_application(AppSettings(environment_name="test"), _MissingInterpreterOrchestratorStub())
    )

    response = client.get("/health")

    assert response.status_code == 503
    assert response.json()["status"] == "degraded"
    assert response.json()["app"] == "up"
    assert response.json()["interpreter"] == "down"
    assert response.json()["detail"] == INTERPRETER_NOT_FOUND_MESSAGE
