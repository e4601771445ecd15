from typing import Optional, Any

class OporaError(Exception):
    """
    Base exception for the Opora bot.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

class AuthenticationError(OporaError):
    """
    Raised when a webhook call carries a wrong secret token.
    """
    def __init__(self, message: str = "Authentication failed", details: Optional[Any] = None):
        super().__init__(message, code="AUTHENTICATION_FAILED", status_code=401, details=details)

class ExternalServiceError(OporaError):
    """
    Raised when an external service (Telegram, MongoDB) fails.
    """
    def __init__(self, message: str = "External service error", details: Optional[Any] = None):
        super().__init__(message, code="EXTERNAL_SERVICE_ERROR", status_code=502, details=details)

class TelegramAPIError(ExternalServiceError):
    """
    Raised when a Bot API call fails, times out or answers ok=false.
    """
    def __init__(self, method: str, message: str = "Telegram API error", details: Optional[Any] = None):
        self.method = method
        super().__init__(f"{method}: {message}", details=details)
