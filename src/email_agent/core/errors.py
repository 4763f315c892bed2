"""Custom exception types for the Email Productivity Agent.

Error messages state what failed, where, and how to fix it when a fix is
actionable. The response engine itself never raises: every input string
produces some reply. These types belong to the layers around it.
"""


class EmailAgentError(Exception):
    """Base exception for all Email Productivity Agent errors."""

    pass


class ConfigValidationError(EmailAgentError):
    """Raised when config.yaml fails Pydantic validation.

    Includes specific field errors with actionable messages.
    """

    pass


class ConfigLoadError(EmailAgentError):
    """Raised when config.yaml cannot be loaded (file not found, YAML parse error)."""

    pass


class DatabaseError(EmailAgentError):
    """Raised when SQLite operations fail."""

    pass


class DuplicateRecordError(DatabaseError):
    """Raised when an insert or update violates a UNIQUE constraint.

    Attributes:
        table: Table that rejected the write
        value: The conflicting value (e.g., the prompt template name)
    """

    def __init__(self, message: str, table: str, value: str | None = None):
        super().__init__(message)
        self.table = table
        self.value = value


class RecordNotFoundError(DatabaseError):
    """Raised when an update targets a row that does not exist.

    Attributes:
        table: Table that was queried
        record_id: Primary key that was not found
    """

    def __init__(self, message: str, table: str, record_id: int):
        super().__init__(message)
        self.table = table
        self.record_id = record_id
