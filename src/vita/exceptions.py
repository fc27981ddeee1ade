"""Exceptions raised by Vita.

Callers (a web layer, the CLI) map these to their own failure codes:
``InvalidInputError`` and ``NotFoundError`` are the caller's fault,
``DependencyError`` subclasses mean the input was fine but an embedding,
search or generation backend failed.
"""


class VitaError(Exception):
    """Base class for all Vita errors."""


class InvalidInputError(VitaError, ValueError):
    """A caller-supplied value is missing or out of range.

    Raised before any external call is made.
    """


class NotFoundError(VitaError, LookupError):
    """A referenced entry or conversation does not exist or is not owned by the caller.

    Attributes:
        resource: Human-readable resource name (e.g. "Conversation").
        resource_id: The id that was looked up.
    """

    def __init__(self, resource: str, resource_id: str) -> None:
        super().__init__(f"{resource} with ID {resource_id} not found")
        self.resource = resource
        self.resource_id = resource_id


class DependencyError(VitaError):
    """An external dependency failed while serving a valid request.

    Attributes:
        stage: Pipeline stage that failed ("embedding", "search", "generation").
    """

    stage = "dependency"

    def __init__(self, cause: str | BaseException) -> None:
        super().__init__(f"{self.stage.capitalize()} failed: {cause}")


class EmbeddingUnavailableError(DependencyError):
    """The embedding provider errored or returned a vector of the wrong shape."""

    stage = "embedding"


class SearchFailedError(DependencyError):
    """The vector store could not run the similarity query."""

    stage = "search"


class GenerationUnavailableError(DependencyError):
    """The generation provider errored or returned no content."""

    stage = "generation"
