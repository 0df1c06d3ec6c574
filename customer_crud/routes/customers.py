"""
Customer Routes
Manager-only customer management: list, fetch, save, remove, block and unblock
"""

from fastapi import APIRouter, Depends, Path
from typing import Annotated, List
import logging

from customer_crud.models.customer import Customer
from customer_crud.models.schemas import CustomerResponse, CustomerSaveRequest
from customer_crud.utils.dependencies import CustomerServiceDep, require_manager
from customer_crud.routes.errors import to_http_exception
from customer_crud.utils.exceptions import CustomerServiceError

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_manager)])

# customers.id is BIGINT; anything wider is a malformed identifier
CustomerId = Annotated[int, Path(ge=-2**63, le=2**63 - 1)]


@router.get("", response_model=List[CustomerResponse])
async def get_all_customers(customers: CustomerServiceDep):
    """List every customer"""
    try:
        return await customers.get_all()
    except CustomerServiceError as e:
        raise to_http_exception(e) from e


@router.get("/active", response_model=List[CustomerResponse])
async def get_all_active_customers(customers: CustomerServiceDep):
    """List customers that are not blocked"""
    try:
        return await customers.get_all_active()
    except CustomerServiceError as e:
        raise to_http_exception(e) from e


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer_by_id(customer_id: CustomerId, customers: CustomerServiceDep):
    try:
        return await customers.get_by_id(customer_id)
    except CustomerServiceError as e:
        raise to_http_exception(e) from e


@router.post("", response_model=CustomerResponse)
async def save_customer(customer_data: CustomerSaveRequest, customers: CustomerServiceDep):
    """
    Create (id=0) or update a customer

    Updates replace name, phone and password; the password is always required.
    """
    item = Customer(
        id=customer_data.id,
        name=customer_data.name,
        phone=customer_data.phone,
        password=customer_data.password,
    )
    try:
        return await customers.save(item)
    except CustomerServiceError as e:
        raise to_http_exception(e) from e


@router.delete("/{customer_id}", response_model=CustomerResponse)
async def remove_customer_by_id(customer_id: CustomerId, customers: CustomerServiceDep):
    try:
        return await customers.remove_by_id(customer_id)
    except CustomerServiceError as e:
        raise to_http_exception(e) from e


@router.post("/block/{customer_id}", response_model=CustomerResponse)
async def block_customer_by_id(customer_id: CustomerId, customers: CustomerServiceDep):
    try:
        return await customers.block_by_id(customer_id)
    except CustomerServiceError as e:
        raise to_http_exception(e) from e


@router.post("/unblock/{customer_id}", response_model=CustomerResponse)
async def unblock_customer_by_id(customer_id: CustomerId, customers: CustomerServiceDep):
    try:
        return await customers.unblock_by_id(customer_id)
    except CustomerServiceError as e:
        raise to_http_exception(e) from e
