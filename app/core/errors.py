"""
Application errors.

ServiceUnavailableError is raised at startup when a dependency (MongoDB, vector
store, LLM provider) is misconfigured. LLMError is raised when a generation call
fails; the question pipeline turns it into its failure answer.
"""


class ServiceUnavailableError(Exception):
    """Raised when a required service (e.g. vector store, database) is unavailable or misconfigured."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class LLMError(Exception):
    """Raised when the language model provider returns an error or no provider is configured."""
