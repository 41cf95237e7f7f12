"""Application-layer exceptions. Do not reuse domain exceptions."""

from typing import Any, Optional, Sequence


class ApplicationError(Exception):
    """Base for all application-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class PersistenceFailedError(ApplicationError):
    """Raised when the storage strategy did not persist an event. Nothing was appended."""


class QueryFailedError(ApplicationError):
    """Raised when an index query could not run or returned an error payload instead of rows."""

    def __init__(
        self,
        message: str,
        index: Optional[str] = None,
        key: Any = None,
    ) -> None:
        super().__init__(message)
        self.index = index
        self.key = key


class PartialFanInFailureError(QueryFailedError):
    """Raised when one stream of a multi-name read fails. No merged result is returned."""

    def __init__(self, failed_name: str, names: Sequence[str], reason: str) -> None:
        super().__init__(
            f"Read of event names {list(names)} failed on {failed_name!r}: {reason}",
            index="name",
            key=failed_name,
        )
        self.failed_name = failed_name
        self.names = tuple(names)
