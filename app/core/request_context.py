import contextvars
from contextlib import contextmanager

request_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar("request_id", default=None)
operation_var: contextvars.ContextVar[str | None] = contextvars.ContextVar("operation", default=None)
provider_var: contextvars.ContextVar[str | None] = contextvars.ContextVar("provider", default=None)


def set_request_id(request_id: str) -> contextvars.Token:
    """Store the current request ID in a context variable."""
    return request_id_var.set(request_id)


def reset_request_id(token: contextvars.Token) -> None:
    """Reset the request ID context variable to a previous state."""
    request_id_var.reset(token)


def get_request_id() -> str | None:
    """Retrieve the current request ID from the context."""
    return request_id_var.get()


def get_operation() -> str | None:
    """Retrieve the current generation operation for logging."""
    return operation_var.get()


def get_provider() -> str | None:
    """Retrieve the upstream provider currently being called."""
    return provider_var.get()


@contextmanager
def log_context(operation: str | None = None, provider: str | None = None):
    """Temporarily scope operation/provider context for structured logs."""
    tokens: list[tuple[contextvars.ContextVar[str | None], contextvars.Token]] = []
    if operation is not None:
        tokens.append((operation_var, operation_var.set(operation)))
    if provider is not None:
        tokens.append((provider_var, provider_var.set(provider)))
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)
