"""Interface layer errors.

Maps domain failures onto HTTP responses.
"""

from fastapi import HTTPException, status

from jfa.domain.error import (
    DomainError,
    NotFoundError,
    PartialBatchFailure,
    UpstreamError,
    ValidationError,
)

STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (UpstreamError, status.HTTP_502_BAD_GATEWAY),
    (PartialBatchFailure, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def http_error(error: DomainError) -> HTTPException:
    """Translate a domain error into an HTTPException.

    Args:
        error: Error raised by a use case

    Returns:
        HTTPException with a matching status and the error text as detail
    """
    for error_type, code in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return HTTPException(status_code=code, detail=str(error))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error)
    )
