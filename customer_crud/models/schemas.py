from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


# Customer Schemas
class CustomerSaveRequest(BaseModel):
    """id=0 creates a customer, any other id fully updates it"""
    id: int = Field(0, ge=-2**63, le=2**63 - 1)
    name: str
    phone: str
    password: str
    active: Optional[bool] = None


class CustomerResponse(BaseModel):
    id: int
    name: str
    phone: str
    active: bool
    created: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# Token Schemas
class TokenRequest(BaseModel):
    phone: str
    password: str


class TokenResponse(BaseModel):
    token: str


class TokenValidateRequest(BaseModel):
    token: str


class TokenValidationInfo(BaseModel):
    status: str
    customer_id: Optional[int] = Field(None, alias="customerId")
    reason: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class TokenValidationResponse(BaseModel):
    status_code: str = Field(..., alias="statusCode")
    info: TokenValidationInfo

    model_config = ConfigDict(populate_by_name=True)
