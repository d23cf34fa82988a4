# storefront/api/errors.py
from fastapi import HTTPException

from storefront.domain.errors import (
    StorefrontError,
    ValidationError,
    NotFoundError,
    IntegrityError,
    ConflictError,
)

STATUS_BY_ERROR = {
    ValidationError: 400,
    NotFoundError: 404,
    ConflictError: 409,
    IntegrityError: 422,
}


def to_http(error: StorefrontError) -> HTTPException:
    status = next(
        (code for cls, code in STATUS_BY_ERROR.items() if isinstance(error, cls)),
        500,
    )
    return HTTPException(status_code=status, detail=error.to_detail())
