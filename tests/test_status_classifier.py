from __future__ import annotations

import pytest

from courier.core.http import CourierStatusError, StatusCode, StatusFamily, classify, error_from_status, family_of


@pytest.mark.parametrize("code", [200, 201, 204, 299])
def test_two_hundreds_are_success(code: int) -> None:
    assert classify(code).is_success is True


@pytest.mark.parametrize("code", [100, 199, 300, 302, 404, 500, 599, 600])
def test_everything_else_is_failure(code: int) -> None:
    assert classify(code).is_success is False


@pytest.mark.parametrize(
    ("code", "family"),
    [
        (100, StatusFamily.INFORMATIONAL),
        (204, StatusFamily.SUCCESS),
        (308, StatusFamily.REDIRECTION),
        (404, StatusFamily.CLIENT_ERROR),
        (599, StatusFamily.SERVER_ERROR),
        (99, StatusFamily.UNRECOGNIZED),
        (600, StatusFamily.UNRECOGNIZED),
        (0, StatusFamily.UNRECOGNIZED),
        (-200, StatusFamily.UNRECOGNIZED),
    ],
)
def test_family_buckets_by_hundreds(code: int, family: StatusFamily) -> None:
    assert family_of(code) is family


def test_outcome_reports_named_code() -> None:
    outcome = classify(404)

    assert outcome.code == 404
    assert outcome.known is StatusCode.NOT_FOUND
    assert classify(299).known is None


@pytest.mark.parametrize(
    ("code", "expected"),
    [
        (404, StatusCode.NOT_FOUND),
        (500, StatusCode.INTERNAL_SERVER_ERROR),
        (302, StatusCode.FOUND),
        (101, StatusCode.SWITCHING_PROTOCOLS),
        (522, StatusCode.CONNECTION_TIMED_OUT),
    ],
)
def test_named_failure_codes_produce_status_error(code: int, expected: StatusCode) -> None:
    error = error_from_status(code)

    assert isinstance(error, CourierStatusError)
    assert error.status_code is expected


@pytest.mark.parametrize("code", [200, 204, 209])
def test_named_success_codes_produce_no_error(code: int) -> None:
    assert error_from_status(code) is None


@pytest.mark.parametrize("code", [199, 299, 430, 600])
def test_unmapped_codes_pass_through_without_error(code: int) -> None:
    assert error_from_status(code) is None


def test_status_code_families() -> None:
    assert StatusCode.CONTINUE.is_informational
    assert StatusCode.IM_USED.is_success
    assert StatusCode.PERMANENT_REDIRECT.is_redirection
    assert StatusCode.IM_A_TEAPOT.is_client_error
    assert StatusCode.NETWORK_CONNECT_TIMEOUT.is_server_error
    assert not StatusCode.NOT_FOUND.is_success
