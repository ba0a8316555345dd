# apps/ecommerce/exceptions.py

from apps.core.exceptions import NotFound, UpstreamError, ValidationFailed


class ProductNotFound(NotFound):
    """Raised when a referenced product does not exist"""
    default_detail = 'Product not found'
    default_code = 'product_not_found'

    def __init__(self, product_id=None):
        detail = f'Product {product_id} not found' if product_id is not None else None
        super().__init__(detail)


class EmptyCheckout(ValidationFailed):
    default_detail = 'Cart is empty'
    default_code = 'empty_checkout'


class MissingShippingAddress(ValidationFailed):
    default_detail = 'Please add a shipping address before checking out'
    default_code = 'missing_address'


class PaymentProcessingException(UpstreamError):
    """Exception raised when the payment processor rejects or fails a call"""
    default_detail = 'Payment processing failed'
    default_code = 'payment_processing_error'
