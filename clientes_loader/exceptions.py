"""Custom exception hierarchy for clientes-loader."""


class ClientesLoaderError(Exception):
    """Base exception for all clientes-loader errors."""


class ConfigurationError(ClientesLoaderError):
    """Raised when configuration is invalid or missing."""


class DatabaseUnavailableError(ClientesLoaderError):
    """Raised when PostgreSQL cannot be reached after all retries."""


class SchemaError(ClientesLoaderError):
    """Raised when the target table cannot be created."""


class SourceError(ClientesLoaderError):
    """Raised when the input file cannot be opened or read."""


class OutOfRangeError(ClientesLoaderError):
    """Raised when a line is too short for the fixed-width layout."""

    def __init__(self, message: str, line_number: int | None = None, width: int = 0) -> None:
        super().__init__(message)
        self.line_number = line_number
        self.width = width


class LoadAbortedError(ClientesLoaderError):
    """Raised when a row fails and the whole transaction was rolled back."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        super().__init__(message)
        self.line_number = line_number


class CommitError(ClientesLoaderError):
    """Raised when the final commit fails."""


class PipelineStateError(ClientesLoaderError):
    """Raised when a pipeline is used outside its lifecycle."""
