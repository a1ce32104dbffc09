"""Tests for obfuscation API endpoint behavior."""

from __future__ import annotations

from fastapi.testclient import TestClient

from fake_tooling import fake_obfuscated_text
from obfuscator.adapters import TempWorkspaceManager
from obfuscator.api.application import create_api_application
from obfuscator.config import AppSettings
from obfuscator.jobs import NO_CODE_MESSAGE, TransformationJobOrchestrator


def _build_settings() -> AppSettings:
    """Create test settings object.

    Returns:
        AppSettings: Deterministic test settings for API creation.

    Raises:
        ValueError: Raised by AppSettings when values are invalid.
    """

    return AppSettings(environment_name="test")


def _build_client(orchestrator: TransformationJobOrchestrator) -> TestClient:
    return TestClient(create_api_application(_build_settings(), orchestrator))


def test_api_obfuscate_returns_code_and_tier_used(
    orchestrator: TransformationJobOrchestrator,
    workspace: TempWorkspaceManager,
) -> None:
    """Return HTTP 200 with obfuscated code and the effective tier.

    Args:
        orchestrator: Orchestrator fixture bound to the fake tool.
        workspace: Workspace fixture.

    Returns:
        None: Assertions validate response behavior.

    Raises:
        AssertionError: Raised when response does not match expected payload.
    """

    client = _build_client(orchestrator)

    response = client.post("/api/obfuscate", json={"code": "print('x')", "preset": "Maximum"})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "obfuscatedCode": fake_obfuscated_text("print('x')", "Strong"),
        "preset": "Maximum",
    }
    assert workspace.workspace_list() == []


def test_api_obfuscate_defaults_missing_and_unknown_presets(orchestrator: TransformationJobOrchestrator) -> None:
    client = _build_client(orchestrator)

    missing_response = client.post("/api/obfuscate", json={"code": "print(1)"})
    unknown_response = client.post("/api/obfuscate", json={"code": "print(1)", "preset": 7})

    assert missing_response.json()["preset"] == "Strong"
    assert unknown_response.status_code == 200
    assert unknown_response.json()["preset"] == "Strong"


def test_api_obfuscate_rejects_empty_or_non_text_code(orchestrator: TransformationJobOrchestrator) -> None:
    """Return HTTP 400 for empty, missing or non-string code.

    Args:
        orchestrator: Orchestrator fixture bound to the fake tool.

    Returns:
        None: Assertions validate input rejection.

    Raises:
        AssertionError: Raised when invalid input is accepted.
    """

    client = _build_client(orchestrator)

    for body in ({"code": ""}, {}, {"code": ["print(1)"]}, {"code": 12}):
        response = client.post("/api/obfuscate", json=body)

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": NO_CODE_MESSAGE}


def test_api_obfuscate_returns_server_error_for_tool_failure(orchestrator: TransformationJobOrchestrator) -> None:
    client = _build_client(orchestrator)

    response = client.post("/api/obfuscate", json={"code": "FAIL_EXIT", "preset": "Weak"})

    assert response.status_code == 500
    assert response.json()["success"] is False
    assert response.json()["error"].startswith("Obfuscation failed:")
    assert "syntax error near FAIL_EXIT" in response.json()["error"]


def test_api_foundation_index_reports_environment(orchestrator: TransformationJobOrchestrator) -> None:
    client = _build_client(orchestrator)

    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["environment"] == "test"
