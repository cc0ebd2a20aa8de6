"""Domain layer errors.

User-caused failures (``ValidationError``, ``NotFoundError``) leave state
untouched. ``UpstreamError`` wraps a failed Jellyfin, Ombi or mail call and
is never fatal to the process. ``PartialBatchFailure`` carries a per-target
error map for operations spanning several accounts.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Bad, missing or duplicate input."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class NoDefaultProfileError(NotFoundError):
    """An invite fell back to the default profile, which does not exist."""

    def __init__(self, name: str):
        super().__init__("Default profile", name)


class UpstreamError(DomainError):
    """A collaborator (Jellyfin, Ombi, mail) reported failure."""

    def __init__(self, service: str, status: int | None = None, detail: str | None = None):
        self.service = service
        self.status = status
        self.detail = detail
        message = f"{service} request failed"
        if status is not None:
            message += f" with status {status}"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class PartialBatchFailure(DomainError):
    """Some targets of a multi-account operation failed."""

    def __init__(self, errors: dict[str, str], total: int):
        self.errors = errors
        self.total = total
        super().__init__(f"{len(errors)} of {total} targets failed")

    @property
    def all_failed(self) -> bool:
        """True when no target succeeded."""
        return len(self.errors) == self.total
