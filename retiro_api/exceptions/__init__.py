from retiro_api.exceptions.base import (
	RetiroException,
	NotFoundError,
	ValidationError,
	ServiceError,
	UpstreamError,
	UnexpectedPayloadError,
)
from retiro_api.exceptions.handler import handle_service_exceptions

__all__ = [
	"RetiroException",
	"NotFoundError",
	"ValidationError",
	"ServiceError",
	"UpstreamError",
	"UnexpectedPayloadError",
	"handle_service_exceptions"
]
