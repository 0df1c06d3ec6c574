"""
Customer Token Routes
Token issuance for customers and token validation for anyone holding one
"""

from fastapi import APIRouter
import logging

from customer_crud.models.schemas import (
    TokenRequest, TokenResponse, TokenValidateRequest,
    TokenValidationInfo, TokenValidationResponse,
)
from customer_crud.routes.errors import to_http_exception
from customer_crud.utils.dependencies import TokenServiceDep
from customer_crud.utils.exceptions import CustomerServiceError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/token", response_model=TokenResponse)
async def issue_customer_token(login_data: TokenRequest, tokens: TokenServiceDep):
    """Exchange a customer's phone and password for a session token"""
    try:
        token = await tokens.issue_token(login_data.phone, login_data.password)
    except CustomerServiceError as e:
        raise to_http_exception(e) from e

    return TokenResponse(token=token)


@router.post(
    "/token/validate",
    response_model=TokenValidationResponse,
    response_model_exclude_none=True,
)
async def validate_customer_token(request_data: TokenValidateRequest, tokens: TokenServiceDep):
    """
    Validate a session token

    Always answers 200; the outcome is carried in the payload.
    """
    result = await tokens.validate_token(request_data.token)

    return TokenValidationResponse(
        status_code=result.status_code,
        info=TokenValidationInfo(
            status=result.status,
            customer_id=result.customer_id,
            reason=result.reason,
        ),
    )
