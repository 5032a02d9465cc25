"""Error Hierarchy - verifies codes, HTTP statuses, retryability and response envelope."""

import pytest

from pension_sim.core.errors import (
    ConfigurationInvariantError,
    DatabaseError,
    ErrorCategory,
    EventPublishError,
    InvalidSimulationRequestError,
    ParticipantNotFoundError,
    SimulationTimeoutError,
    UpstreamError,
)


@pytest.mark.parametrize(
    "error, code, status, retryable",
    [
        (ParticipantNotFoundError("P404"), "PARTICIPANT_NOT_FOUND", 404, False),
        (InvalidSimulationRequestError("bad"), "INVALID_SIMULATION_REQUEST", 400, False),
        (SimulationTimeoutError("P001", 100), "SIMULATION_TIMEOUT", 504, True),
        (UpstreamError("boom", "contributions"), "UPSTREAM_FAILURE", 503, True),
        (DatabaseError("gone", "query"), "DATABASE_ERROR", 503, False),
        (ConfigurationInvariantError("zero", "monthly_benefit_divisor"),
         "CONFIGURATION_INVARIANT_VIOLATED", 500, False),
        (EventPublishError("broker down"), "EVENT_PUBLISH_FAILED", 502, True),
    ],
)
def test_error_codes_and_statuses(error, code, status, retryable):
    assert error.code == code
    assert error.http_status == status
    assert error.retryable is retryable


def test_not_found_response_envelope():
    body = ParticipantNotFoundError("P404").to_response()["error"]

    assert body["code"] == "PARTICIPANT_NOT_FOUND"
    assert body["message"] == "Participant not found: P404"
    assert body["category"] == ErrorCategory.RESOURCE_NOT_FOUND.value
    assert body["severity"] == "info"
    assert body["context"]["participant_id"] == "P404"


def test_timeout_carries_deadline_in_context():
    error = SimulationTimeoutError("P001", 250)
    assert error.to_response()["error"]["context"]["timeout_ms"] == 250


def test_database_error_is_an_upstream_error():
    error = DatabaseError("connection refused", "session")

    assert isinstance(error, UpstreamError)
    assert error.source == "database"
    assert error.context.source == "database"
    assert error.message == "Database session failed: connection refused"


def test_upstream_error_names_source():
    error = UpstreamError("timeout talking to db", "fund_return_rates")
    assert error.source == "fund_return_rates"
    assert error.to_response()["error"]["context"]["source"] == "fund_return_rates"
