"""
Logging filters

Request ID filter and helpers for logging.

The request id lives in a `contextvars.ContextVar`, so it follows a request
across awaits and never leaks between concurrently handled requests.
`RequestIDMiddleware` sets it at the start of each request; `RequestIdFilter`
copies it onto every LogRecord so formatters can reference `%(request_id)s`
(records outside a request get the sentinel "-").

`RedactFilter` masks sensitive `extra` attributes (password, token, ...)
before any handler formats them.
"""

import logging
from logging import LogRecord
import contextvars

_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


def set_request_id(request_id: str | None):
    """
    Set the request id in the current context and return the token to allow reset.
    """
    return _request_id_ctx.set(request_id)


def reset_request_id(token):
    """
    Reset the contextvar to the previously saved token returned by set_request_id().
    """
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Guarantees every LogRecord has a `request_id` attribute:

      * an explicit `extra={"request_id": ...}` wins,
      * otherwise the contextvar value set by the middleware,
      * otherwise "-".

    Always returns True; it annotates, never drops.
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = (
            getattr(record, "request_id", None) or get_request_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    SENSITIVE = {"password", "secret", "token", "access_token", "refresh_token", "authorization", "database_url"}

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = "***REDACTED***"
        return True
