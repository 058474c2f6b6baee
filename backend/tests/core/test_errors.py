"""Error Hierarchy — verifies codes, statuses, and the response envelope."""

from lucid.core.errors import (
    ApiKeyMissingError, DatabaseError, ErrorCategory, ErrorContext, LucidError,
    ProviderAPIError, ResourceNotFoundError, ValidationError,
)


def test_domain_errors_are_400_level():
    assert ValidationError("bad", "field").http_status == 400
    assert ApiKeyMissingError().http_status == 400
    assert ResourceNotFoundError("Reading", "abc").http_status == 404


def test_infrastructure_errors_are_503():
    assert DatabaseError("down", "execute").http_status == 503
    assert ProviderAPIError("boom", "timeout").http_status == 503


def test_api_key_missing_message():
    err = ApiKeyMissingError()
    assert str(err) == "API Key missing"
    assert err.category == ErrorCategory.CONFIGURATION


def test_provider_error_carries_retry_after():
    err = ProviderAPIError("slow down", "rate_limit", retry_after_ms=2000)
    assert err.context.retry_after_ms == 2000
    assert err.api_error_type == "rate_limit"


def test_to_response_prefers_user_message():
    ctx = ErrorContext(provider="gemini", user_message="Try again later")
    body = ProviderAPIError("raw upstream text", "client_error", context=ctx).to_response()
    assert body["error"]["message"] == "Try again later"
    assert body["error"]["code"] == "PROVIDER_API_ERROR"
    assert body["error"]["context"]["provider"] == "gemini"


def test_all_errors_share_base():
    assert issubclass(ResourceNotFoundError, LucidError)
