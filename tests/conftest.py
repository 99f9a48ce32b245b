"""
Pytest configuration and fixtures for rpc-client-tcb tests.

This module provides fixtures for:
- Recording transports that let a test settle each call by hand
- Transports that answer immediately with a canned response
- Loading envelope conformance cases from YAML
"""

import os
import pytest
import yaml
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable


CONFORMANCE_DIR = Path(__file__).parent / "conformance"


# ============================================================================
# Fake Transports
# ============================================================================

@dataclass
class PendingCall:
    """A transport invocation captured by RecordingTransport."""
    name: str
    data: dict[str, Any]
    on_success: Callable[[Any], None]
    on_failure: Callable[[Any], None]

    def succeed(self, response: Any) -> None:
        self.on_success(response)

    def fail(self, error: Any) -> None:
        self.on_failure(error)


class RecordingTransport:
    """Transport that records calls and never answers on its own."""

    def __init__(self) -> None:
        self.calls: list[PendingCall] = []

    def __call__(self, name, data, on_success, on_failure) -> None:
        self.calls.append(PendingCall(name, data, on_success, on_failure))


class ReplyingTransport(RecordingTransport):
    """Transport that answers every call immediately."""

    def __init__(self, response: Any = None, error: Any = None) -> None:
        super().__init__()
        self.response = response
        self.error = error

    def __call__(self, name, data, on_success, on_failure) -> None:
        super().__call__(name, data, on_success, on_failure)
        if self.error is not None:
            on_failure(self.error)
        else:
            on_success(self.response)


# ============================================================================
# Unit Test Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def reset_config():
    """Clear process-wide defaults around every test."""
    from rpc_tcb import reset

    reset()
    yield
    reset()


@pytest.fixture
def function_name() -> str:
    """Provide a test function name."""
    return "rpcEntry"


@pytest.fixture
def recording_transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def make_replying_transport() -> Callable[..., ReplyingTransport]:
    """Factory for transports answering with a fixed response or error."""
    return ReplyingTransport


@pytest.fixture
def recording_client(function_name: str, recording_transport: RecordingTransport):
    """Create an RpcClient over a RecordingTransport."""
    from rpc_tcb import create_client

    return create_client({"functionName": function_name}, transport=recording_transport)


@pytest.fixture
def make_client(function_name: str):
    """Factory for clients over a given transport."""
    from rpc_tcb import create_client

    def factory(transport):
        return create_client({"functionName": function_name}, transport=transport)

    return factory


# ============================================================================
# Conformance Cases
# ============================================================================

def load_envelope_cases(case_dir: Path) -> list[dict[str, Any]]:
    """Load all envelope conformance cases from YAML files."""
    cases = []
    if not case_dir.exists():
        return cases

    for case_file in sorted(case_dir.glob("*.yaml")):
        with open(case_file) as f:
            doc = yaml.safe_load(f)
            if doc and "cases" in doc:
                for case in doc["cases"]:
                    case["_file"] = case_file.name
                    case["_category"] = doc.get("name", case_file.stem)
                    cases.append(case)
    return cases


def pytest_generate_tests(metafunc):
    """Generate test cases from conformance YAML files."""
    if "envelope_case" in metafunc.fixturenames:
        case_dir = Path(os.environ.get("RPC_TCB_CONFORMANCE_DIR", CONFORMANCE_DIR))
        cases = load_envelope_cases(case_dir)
        if cases:
            metafunc.parametrize(
                "envelope_case",
                cases,
                ids=[f"{c.get('_category', 'case')}::{c['name']}" for c in cases]
            )
        else:
            metafunc.parametrize("envelope_case", [{}], ids=["no_cases_found"])
