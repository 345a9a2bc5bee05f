"""Error taxonomy shared by the services and the HTTP layer.

Every error carries the HTTP status it maps to; the API renders it as
``{"error": message}``.
"""


class PortalError(Exception):
	status_code: int = 500
	default_message: str = "Server error"

	def __init__(self, message: str | None = None) -> None:
		self.message = message or self.default_message
		super().__init__(self.message)


class ValidationError(PortalError):
	status_code = 400
	default_message = "Invalid input"


class NotFoundError(ValidationError):
	status_code = 404
	default_message = "Not found"


class AuthError(PortalError):
	status_code = 401
	default_message = "Invalid credentials"


class InvalidTokenError(AuthError):
	status_code = 403
	default_message = "Invalid token"


class AuthorizationError(PortalError):
	status_code = 403
	default_message = "Admin access required"


class StorageError(PortalError):
	status_code = 500
	default_message = "Storage error"


class OrderSubmissionFailed(StorageError):
	status_code = 503
	default_message = "Failed to send order. Please try again."


class NotifyError(PortalError):
	default_message = "Notification failed"
