"""Error taxonomy shared by the schedule and image paths.

Every error carries the user-visible ``error`` title, optional ``details`` and
the HTTP status the relay answers with.
"""
from __future__ import annotations

from typing import Optional


class PlannerError(Exception):
    status_code: int = 500
    kind: str = "planner"

    def __init__(self, error: str, details: Optional[str] = None):
        super().__init__(error if details is None else f"{error}: {details}")
        self.error = error
        self.details = details

    def to_body(self) -> dict:
        body = {"error": self.error}
        if self.details:
            body["details"] = self.details
        return body


class InvalidRequestError(PlannerError):
    status_code = 400
    kind = "invalid_request"


class ConfigurationError(PlannerError):
    status_code = 500
    kind = "configuration"


class AuthError(PlannerError):
    status_code = 401
    kind = "auth"


class QuotaError(PlannerError):
    status_code = 402
    kind = "quota"


class RateLimitError(PlannerError):
    status_code = 429
    kind = "rate_limit"


class ProviderTimeoutError(PlannerError):
    status_code = 504
    kind = "timeout"


class UpstreamError(PlannerError):
    status_code = 500
    kind = "upstream"


class EmptyResponseError(UpstreamError):
    kind = "empty_response"


class ParseError(PlannerError):
    status_code = 500
    kind = "parse"


def missing_key_error(provider: str) -> ConfigurationError:
    return ConfigurationError(
        f"{provider} API key is missing",
        "Please check the environment variables",
    )


def timeout_error(provider: str) -> ProviderTimeoutError:
    return ProviderTimeoutError(
        f"Request to {provider} timed out",
        f"The {provider} service is taking too long to respond",
    )


def classify_upstream_error(provider: str, status_code: int, message: str) -> PlannerError:
    """Map a failed upstream response onto the taxonomy.

    The message is inspected first; the status code only decides when the
    message names nothing we recognise.
    """
    text = (message or "").lower()

    if "authentication" in text:
        return _auth(provider)
    if "billing" in text or "quota" in text:
        return _quota(provider)
    if "rate limit" in text or "rate_limit" in text:
        return _rate_limit(provider)

    if status_code in (401, 403):
        return _auth(provider)
    if status_code == 402:
        return _quota(provider)
    if status_code == 429:
        return _rate_limit(provider)

    return UpstreamError(f"{provider} request failed", f"API error: {message}")


def _auth(provider: str) -> AuthError:
    return AuthError(
        f"Invalid {provider} API key",
        "The provided API key is incorrect or has expired",
    )


def _quota(provider: str) -> QuotaError:
    return QuotaError(
        f"{provider} billing issue",
        f"There may be an issue with your {provider} account quota or billing",
    )


def _rate_limit(provider: str) -> RateLimitError:
    return RateLimitError(
        f"{provider} rate limit exceeded",
        f"Too many requests sent to {provider} in a short time",
    )
