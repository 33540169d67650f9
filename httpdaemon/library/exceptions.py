class HttpDaemonError(Exception):
    """Base class for all errors raised by the daemon."""


class InvalidRouteError(HttpDaemonError):
    """Exception raised when a route binding is missing its path or method."""


class DuplicateRouteError(HttpDaemonError):
    def __init__(self, path: str, method: str):
        """
        Raised when a (path, method) pair is registered a second time.

        Args:
            path (str): The request path of the rejected binding.
            method (str): The HTTP method of the rejected binding.
        """
        self.path = path
        self.method = method
        super().__init__(f"route already exists: {path} {method}")


class RouteNotFoundError(HttpDaemonError):
    def __init__(self, path: str, method: str):
        """
        Raised when no binding matches a request.

        Args:
            path (str): The requested path.
            method (str): The requested HTTP method.
        """
        self.path = path
        self.method = method
        super().__init__(f"invalid request {path} / {method}")


class ParseFormError(HttpDaemonError):
    """Exception raised when a query string or form body is malformed."""


class MissingParameterError(HttpDaemonError):
    def __init__(self, key: str):
        """
        Raised when a required request parameter is absent or empty.

        Args:
            key (str): Name of the first missing parameter.
        """
        self.key = key
        super().__init__(f"params are not matched or empty: '{key}'")


class SerializationError(HttpDaemonError):
    """Exception raised when an envelope body cannot be serialized to JSON."""


class InvalidEnvelopeError(HttpDaemonError):
    """Exception raised when a peer response is not a valid envelope."""
