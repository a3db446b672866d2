"""Exceptions raised by the checkout domain and its repositories."""


class DomainError(Exception):
    """Base class for every checkout domain failure."""


class ValidationError(DomainError):
    pass


class OrderValidationError(ValidationError):
    pass


class OrderItemValidationError(ValidationError):
    pass


class CustomerValidationError(ValidationError):
    pass


class ProductValidationError(ValidationError):
    pass


class NotFoundError(DomainError):
    pass


class OrderNotFoundError(NotFoundError):
    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__("Order not found")


class CustomerNotFoundError(NotFoundError):
    def __init__(self, customer_id: str):
        self.customer_id = customer_id
        super().__init__("Customer not found")


class ProductNotFoundError(NotFoundError):
    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__("Product not found")


class RetrievalError(DomainError):
    pass


class OrderRetrievalError(RetrievalError):
    def __init__(self, message: str = "Error retrieving all orders"):
        super().__init__(message)
