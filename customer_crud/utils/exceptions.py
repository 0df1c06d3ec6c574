"""
Service Exceptions
Error kinds raised by the stores and translated to HTTP status codes by the routes
"""


class CustomerServiceError(Exception):
    """Base exception for customer service errors"""
    pass


class NotFoundError(CustomerServiceError):
    """No matching row"""

    def __init__(self, message: str = "item not found"):
        super().__init__(message)


class InvalidInputError(CustomerServiceError):
    """Malformed request body or identifier"""
    pass


class NoSuchUserError(CustomerServiceError):
    """No customer registered with the given phone"""

    def __init__(self, message: str = "no such user"):
        super().__init__(message)


class InvalidPasswordError(CustomerServiceError):
    """Password does not match the stored hash"""

    def __init__(self, message: str = "invalid password"):
        super().__init__(message)


class InternalError(CustomerServiceError):
    """Engine, hashing or entropy failure; details are logged, never returned"""

    def __init__(self, message: str = "internal error"):
        super().__init__(message)


class TokenGenerationError(InternalError):
    """Random source could not supply the requested entropy"""
    pass
