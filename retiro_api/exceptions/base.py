from fastapi import status
from typing import Optional

class RetiroException(Exception):
	"""
	Base exception class for all Retiro API custom exceptions.
	All service layer exceptions should inherit from this.
	"""
	def __init__(
		self,
		message: str,
		status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
		detail: Optional[str] = None
	):
		self.message = message
		self.status_code = status_code
		self.detail = detail or message
		super().__init__(self.message)

class NotFoundError(RetiroException):
	"""
	Exception raised when a resource is not found.
	Maps to HTTP 404.
	"""
	def __init__(self, resource_type: str, resource_id: str):
		message = f"{resource_type} '{resource_id}' not found"
		super().__init__(
			message=message,
			status_code=status.HTTP_404_NOT_FOUND,
			detail=message
		)

class ValidationError(RetiroException):
	"""
	Exception raised when validation fails.
	Maps to HTTP 400.
	"""
	def __init__(self, message: str, detail: Optional[str] = None):
		super().__init__(
			message=message,
			status_code=status.HTTP_400_BAD_REQUEST,
			detail=detail or message
		)

class ServiceError(RetiroException):
	"""
	Exception raised when a service operation fails.
	Maps to HTTP 500 by default, but can be customized.
	"""
	def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
		super().__init__(
			message=message,
			status_code=status_code,
			detail=message
		)

class UpstreamError(ServiceError):
	"""
	Exception raised when an upstream feed cannot be fetched or answers
	with a non-success status (including the AEMET "where is my data" step).
	Maps to HTTP 502.
	"""
	def __init__(self, source: str, message: str):
		self.source = source
		super().__init__(
			message=f"{source}: {message}",
			status_code=status.HTTP_502_BAD_GATEWAY
		)

class UnexpectedPayloadError(ServiceError):
	"""
	Exception raised when a non-empty warnings payload contains no CAP
	alert documents. Usually means the upstream format changed.
	Maps to HTTP 502.
	"""
	def __init__(self, content_type: Optional[str], preview: str):
		self.content_type = content_type
		self.preview = preview
		super().__init__(
			message=f"Unexpected warnings payload (content-type={content_type!r}): no CAP alert documents found in {preview!r}",
			status_code=status.HTTP_502_BAD_GATEWAY
		)
