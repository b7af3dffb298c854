from functools import wraps
from fastapi import HTTPException, status
from retiro_api.exceptions.base import RetiroException

def handle_service_exceptions(func):
    """
    Decorator to handle service layer exceptions uniformly.
    Converts RetiroException to HTTPException with appropriate status codes.
    
    Usage:
        @handle_service_exceptions
        async def my_endpoint():
            # Service calls that may raise RetiroException
            result = SomeService.do_something()
            return result
    """
    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except RetiroException as e:
            raise HTTPException(
                status_code=e.status_code,
                detail=e.detail
            )
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Internal server error: {str(e)}"
            )
    return wrapper
