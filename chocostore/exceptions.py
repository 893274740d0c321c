"""
Custom exceptions for the ChocoStore order backend
"""


class ChocoStoreException(Exception):
    """Base exception for all ChocoStore errors"""
    def __init__(self, message: str, code: str = "CHOCOSTORE_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


class RemoteFetchError(ChocoStoreException):
    """Raised when the store cannot be read"""
    def __init__(self, resource: str, reason: str = None):
        self.resource = resource
        self.reason = reason
        super().__init__(
            message=f"Failed to load {resource}",
            code="REMOTE_FETCH_ERROR"
        )


class OrderValidationError(ChocoStoreException):
    """Raised when a wizard state is not ready to be submitted"""
    def __init__(self, message: str, title: str = "Missing Information"):
        self.title = title
        super().__init__(message=message, code="ORDER_VALIDATION_ERROR")


class OrderSubmissionError(ChocoStoreException):
    """Raised when the order row could not be written"""
    def __init__(self, message: str = "Failed to place order. Please try again.", code: str = "ORDER_FAILED"):
        super().__init__(message=message, code=code)


class OrderItemsWriteError(OrderSubmissionError):
    """Raised when the order row was written but its items were not"""
    def __init__(self, order_id: int):
        self.order_id = order_id
        super().__init__(code="ORDER_ITEMS_FAILED")


class UploadValidationError(ChocoStoreException):
    """Raised for uploads with a wrong type or size"""
    def __init__(self, message: str, field: str = None):
        self.field = field
        super().__init__(message=message, code="UPLOAD_VALIDATION_ERROR")


class StorageError(ChocoStoreException):
    """Raised when object storage rejects a request"""
    def __init__(self, message: str, key: str = None):
        self.key = key
        super().__init__(message=f"Storage error: {message}", code="STORAGE_ERROR")
