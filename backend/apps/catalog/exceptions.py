"""Product error taxonomy raised by ``ProductService``.

Each error carries its API code and HTTP status, so views let them propagate
to ``apps.api.exceptions.global_exception_handler``.
"""

from rest_framework import status

from apps.api.exceptions import ApplicationError


class ProductApiError(ApplicationError):
    """Base class for every product service failure."""


class ProductNotFoundError(ProductApiError):
    default_code = "NOT_FOUND"
    default_status = status.HTTP_404_NOT_FOUND

    def __init__(self, product_id):
        super().__init__(
            f"Product not found with id: {product_id}",
            details={"id": str(product_id)},
        )


class ProductDeletedError(ProductApiError):
    """The product exists but is in the deleted state."""

    default_code = "GONE"
    default_status = status.HTTP_410_GONE

    def __init__(self, product_id, message=None):
        super().__init__(
            message or f"Product with id {product_id} is deleted.",
            details={"id": str(product_id)},
        )


class ProductAlreadyExistsError(ProductApiError):
    default_code = "CONFLICT"
    default_status = status.HTTP_409_CONFLICT


class ProductUpdateFailedError(ProductApiError):
    default_code = "UPDATE_FAILED"
    default_status = status.HTTP_500_INTERNAL_SERVER_ERROR
