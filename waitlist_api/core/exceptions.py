"""
Custom exceptions for the application
"""

class BaseAppException(Exception):
    """Base application exception"""
    def __init__(self, message: str, details: str = None):
        self.message = message
        self.details = details
        super().__init__(self.message)


class ValidationError(BaseAppException):
    """Raised when validation fails"""
    def __init__(self, message: str, details: str = None, error_code: str = None):
        super().__init__(message, details)
        self.error_code = error_code


class BusinessLogicError(BaseAppException):
    """Raised when business logic constraints are violated"""
    pass


class DuplicateEmailError(BusinessLogicError):
    """Raised when an email is already registered for the waitlist"""
    def __init__(self, email: str):
        super().__init__("Email already registered for waitlist")
        self.email = email


class DuplicateUsernameError(BusinessLogicError):
    """Raised when a username is already taken"""
    def __init__(self, username: str):
        super().__init__("Username already exists")
        self.username = username


class DatabaseError(BaseAppException):
    """Raised when database operations fail"""
    pass
