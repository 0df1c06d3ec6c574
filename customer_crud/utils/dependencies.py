"""
FastAPI Dependencies
Service lookup and manager authentication dependencies
"""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from typing import Annotated, Optional
import logging

from customer_crud.context import ServiceContext
from customer_crud.services.customer_service import CustomerService
from customer_crud.services.token_service import TokenService

logger = logging.getLogger(__name__)

# Missing credentials must be a 400, so FastAPI must not answer 401 itself
basic_security = HTTPBasic(auto_error=False)


def get_context(request: Request) -> ServiceContext:
    """Service context built at startup"""
    context = getattr(request.app.state, "context", None)
    if context is None:
        raise RuntimeError("Service context not initialized")
    return context


def get_customer_service(context: ServiceContext = Depends(get_context)) -> CustomerService:
    return context.customers


def get_token_service(context: ServiceContext = Depends(get_context)) -> TokenService:
    return context.tokens


async def require_manager(
    credentials: Optional[HTTPBasicCredentials] = Depends(basic_security),
    context: ServiceContext = Depends(get_context),
) -> str:
    """
    Require HTTP Basic credentials of a manager

    Returns:
        str: Manager login

    Raises:
        HTTPException: 400 if credentials are missing, 401 if they are invalid
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Bad Request",
        )

    if not await context.security.authenticate_manager(credentials.username, credentials.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Basic"},
        )

    return credentials.username


# Type aliases for cleaner dependency injection
CustomerServiceDep = Annotated[CustomerService, Depends(get_customer_service)]
TokenServiceDep = Annotated[TokenService, Depends(get_token_service)]
