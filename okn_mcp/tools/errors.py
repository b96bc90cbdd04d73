"""Error types raised while resolving and executing OKN tool calls."""


class OKNToolError(Exception):
    """Base class for failures turned into error responses by the dispatcher."""
    kind = "Tool error"


class ValidationError(OKNToolError):
    """Raised when a required tool argument is missing or empty."""
    kind = "Invalid arguments"


class NotFoundError(OKNToolError):
    """Raised when a query tool names a knowledge graph that is not registered."""
    kind = "Not found"


class UnknownToolError(OKNToolError):
    """Raised when a tool name matches no known tool pattern."""
    kind = "Unknown tool"


class QueryTimeoutError(OKNToolError):
    """Raised when a remote query exceeds its deadline."""
    kind = "Query timed out"

    def __init__(self, timeout_ms: int):
        super().__init__(f"Query timeout after {timeout_ms}ms")
        self.timeout_ms = timeout_ms


class HttpError(OKNToolError):
    """Raised when a SPARQL endpoint answers with a non-2xx status."""
    kind = "Endpoint returned an error"

    def __init__(self, status_code: int, body: str):
        super().__init__(f"HTTP {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class TransportError(OKNToolError):
    """Raised on network-level failures (DNS, refused or reset connections)."""
    kind = "Network failure"


class ParseError(OKNToolError):
    """Raised when a SPARQL results payload cannot be decoded."""
    kind = "Malformed results"
