import pytest

from ishaazi.core.errors import (
    AuthorizationError,
    FetchError,
    IshaaziError,
    NetworkError,
    NotFoundError,
    ValidationError,
    domain_error_to_http,
    http_status_to_error,
)


@pytest.mark.parametrize(
    "status, cls",
    [
        (400, ValidationError),
        (422, ValidationError),
        (401, AuthorizationError),
        (403, AuthorizationError),
        (404, NotFoundError),
        (409, NetworkError),
        (503, NetworkError),
    ],
)
def test_http_status_to_error(status, cls):
    err = http_status_to_error(status, "detail")
    assert type(err) is cls
    assert err.status_code == status
    assert err.message == "detail"


def test_http_status_without_detail():
    assert http_status_to_error(500).message == "API error: 500"


def test_domain_error_to_http_keeps_status_and_message():
    exc = domain_error_to_http(AuthorizationError("Admin privileges required", status_code=403))
    assert exc.status_code == 403
    assert exc.detail == "Admin privileges required"
    assert domain_error_to_http(NotFoundError()).detail == "NotFoundError"


def test_fetch_error_is_a_network_error():
    assert issubclass(FetchError, NetworkError)
    assert issubclass(NetworkError, IshaaziError)
    assert IshaaziError("x").status_code == 500
