"""Exception taxonomy shared by every layer of the client.

Architectural role:
    Defines the single error hierarchy raised by builders, transport and the
    run lifecycle controller. Callers can catch `OpenApiError` for everything
    or a specific subclass for one failure kind.

Failure kinds:
    - `ClientConfigError`: credential/configuration missing or invalid.
    - `TransportError` / `APIStatusError`: network or HTTP-layer failure.
    - `DeserializationError`: response body did not match the expected shape.
    - `BuilderValidationError` and subclasses: a builder parameter violated a
      documented numeric, length or cardinality limit.
    - `RestrictedValueError`: a semantic rule was violated (for example a
      dependent parameter set before its prerequisite).
    - `OperationalError`: a business rule did not hold after a successful call.
    - `PollingStopped`: a caller-supplied deadline or cancel signal ended a
      polling loop before the run reached a terminal state.

Local vs remote:
    Validation and restricted-value failures are raised before any network
    access and leave the builder untouched, so callers can correct the input
    and retry. Transport and deserialization failures are surfaced unmodified;
    nothing in this package retries automatically.
"""


class OpenApiError(Exception):
    """Base class for all errors raised by this package."""


class ClientConfigError(OpenApiError):
    """Raised when the client cannot be configured (for example no API key)."""


class TransportError(OpenApiError):
    """Raised when the HTTP request itself fails (connection, timeout, TLS)."""


class APIStatusError(TransportError):
    """Raised for HTTP responses with a 4xx/5xx status code.

    Attributes:
        status_code: HTTP status returned by the service.
        body: Decoded JSON error body when available, else raw text or `None`.
    """

    def __init__(self, status_code, message, body=None):
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.body = body


class DeserializationError(OpenApiError):
    """Raised when a response cannot be decoded into the expected shape."""

    def __init__(self, endpoint, detail):
        super().__init__(f"[{endpoint}] could not decode response: {detail}")
        self.endpoint = endpoint
        self.detail = detail


class BuilderValidationError(OpenApiError):
    """Base class for builder-side constraint violations."""


class OutOfRangeError(BuilderValidationError):
    """Raised when a numeric parameter falls outside its inclusive range."""

    def __init__(self, name, value, minimum, maximum):
        super().__init__(f"{name} must be between {minimum} and {maximum} (got {value})")
        self.name = name
        self.value = value
        self.minimum = minimum
        self.maximum = maximum


class InvalidLengthError(BuilderValidationError):
    """Raised when a string or list exceeds its maximum length.

    Attributes:
        actual: Length that was supplied.
        maximum: Largest accepted length.
    """

    def __init__(self, actual, maximum, name=None):
        label = f"{name} length" if name else "Length"
        super().__init__(f"{label} {actual} exceeds maximum of {maximum}")
        self.actual = actual
        self.maximum = maximum
        self.name = name


class InvalidIdentifierError(BuilderValidationError, TypeError):
    """Raised when a value cannot be resolved into a resource identifier."""


class RestrictedValueError(OpenApiError):
    """Raised when a value is well-formed but not allowed in context."""


class OperationalError(OpenApiError):
    """Raised when an expected invariant does not hold after a successful call."""


class PollingStopped(OpenApiError):
    """Raised when a polling loop is stopped by its caller before a terminal state.

    Attributes:
        reason: `"timeout"` or `"cancelled"`.
        run: Last snapshot observed before stopping.
    """

    def __init__(self, reason, run):
        super().__init__(f"Polling stopped ({reason}) with run {run.id} in status {run.status.value}")
        self.reason = reason
        self.run = run
