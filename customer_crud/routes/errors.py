"""
Translation of service errors to HTTP responses
"""

from fastapi import HTTPException, status

from customer_crud.utils.exceptions import (
    CustomerServiceError, InvalidInputError, InvalidPasswordError,
    NoSuchUserError, NotFoundError,
)


def to_http_exception(error: CustomerServiceError) -> HTTPException:
    """Map a service error to its HTTP status; internal details stay in the log"""
    if isinstance(error, (NotFoundError, NoSuchUserError)):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
    if isinstance(error, InvalidInputError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error) or "Bad Request")
    if isinstance(error, InvalidPasswordError):
        return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal Server Error")
