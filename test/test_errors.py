from planner_ai.errors import (
    AuthError,
    EmptyResponseError,
    QuotaError,
    RateLimitError,
    UpstreamError,
    classify_upstream_error,
    missing_key_error,
)

def test_message_wins_over_status():
    assert isinstance(classify_upstream_error("OpenAI", 429, "insufficient quota"), QuotaError)
    assert isinstance(classify_upstream_error("OpenAI", 500, "Authentication error"), AuthError)
    assert isinstance(classify_upstream_error("OpenAI", 400, "rate_limit_exceeded"), RateLimitError)

def test_status_fallbacks():
    assert isinstance(classify_upstream_error("OpenAI", 401, "bad key"), AuthError)
    assert isinstance(classify_upstream_error("OpenAI", 402, "pay up"), QuotaError)
    assert isinstance(classify_upstream_error("OpenAI", 429, "slow down"), RateLimitError)

def test_other_failures_keep_raw_message():
    err = classify_upstream_error("Anthropic", 418, "teapot")
    assert type(err) is UpstreamError
    assert err.status_code == 500
    assert err.to_body() == {"error": "Anthropic request failed", "details": "API error: teapot"}

def test_rate_limit_body():
    err = classify_upstream_error("OpenAI", 429, "rate limit")
    assert err.status_code == 429
    assert err.to_body()["error"] == "OpenAI rate limit exceeded"

def test_empty_response_is_an_upstream_failure():
    assert issubclass(EmptyResponseError, UpstreamError)

def test_missing_key():
    err = missing_key_error("OpenAI")
    assert err.status_code == 500
    assert err.error == "OpenAI API key is missing"
