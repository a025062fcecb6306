class InventoryAdminError(Exception):
    """Base exception for Inventory Admin errors."""

    def __init__(self, message=None, code=None, details=None):
        """Initialize the exception.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
        """
        self.message = message or "An error occurred in Inventory Admin"
        self.code = code
        self.details = details
        super().__init__(self.message)

    def __str__(self):
        """String representation of the error."""
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message

    def to_dict(self):
        """Convert the exception to a dictionary."""
        error_dict = {
            'error': self.__class__.__name__,
            'message': self.message,
        }

        if self.code:
            error_dict['code'] = self.code

        if self.details:
            error_dict['details'] = self.details

        return error_dict


class ConfigError(InventoryAdminError):
    """Exception raised for configuration errors."""

    def __init__(self, message=None, code=None, details=None):
        message = message or "Configuration error"
        super().__init__(message, code, details)


class DataServiceError(InventoryAdminError):
    """Exception raised when the remote data service rejects or fails a call."""

    def __init__(self, message=None, code=None, details=None):
        message = message or "Data service error"
        super().__init__(message, code, details)


class NotFoundError(DataServiceError):
    """Exception raised when a row addressed by id does not exist remotely."""

    def __init__(self, message=None, code=None, details=None):
        message = message or "Resource not found"
        super().__init__(message, code, details)


class AuthenticationError(InventoryAdminError):
    """Exception raised for sign-in, sign-out and session lookup failures."""

    def __init__(self, message=None, code=None, details=None):
        message = message or "Authentication error"
        super().__init__(message, code, details)


class ValidationError(InventoryAdminError):
    """Exception raised for data validation errors."""

    def __init__(self, message=None, code=None, details=None):
        message = message or "Validation error"
        super().__init__(message, code, details)
