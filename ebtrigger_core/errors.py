class TriggerError(Exception):
    """Base error for the Eventbrite trigger."""


class RecoverableError(TriggerError):
    """Indicates the operation can be retried safely."""


class PermanentError(TriggerError):
    """Indicates the operation should not be retried."""


class AuthError(TriggerError):
    """Authentication or authorization failure."""


class ValidationError(TriggerError):
    """Input validation failure."""


class SubscriptionStateError(PermanentError):
    """Lifecycle operation invoked in the wrong subscription state."""


class RemoteRequestError(TriggerError):
    """The Eventbrite API rejected a request or could not be reached."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        method: str | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.method = method
        self.url = url


class RemoteNotFound(RemoteRequestError):
    """The remote object does not exist."""


class RemoteTransportError(RemoteRequestError, RecoverableError):
    """Network failure or a transient remote status (429, 5xx)."""


class RemoteAuthError(RemoteRequestError, AuthError):
    """The API token was rejected."""
