"""Domain errors raised by handlers and translated to responses by the RPC facade."""


class RepairDeskError(Exception):
    """Base class for every error a handler raises on purpose."""

    status_code = 500
    kind = "unknown"

    def to_dict(self):
        return {"error": self.kind, "message": str(self)}


class NotFoundError(RepairDeskError):
    """A referenced record id does not resolve."""

    status_code = 404
    kind = "not_found"

    def __init__(self, entity: str, record_id):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} with id {record_id} not found")


class BusinessRuleViolation(RepairDeskError):
    """Input was well formed but breaks a shop rule."""

    status_code = 409
    kind = "business_rule"


class InsufficientStockError(BusinessRuleViolation):
    kind = "insufficient_stock"

    def __init__(self, product_name: str, available: int, requested: int):
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient stock for product {product_name}. "
            f"Available: {available}, Requested: {requested}"
        )


class InvalidStatusError(BusinessRuleViolation):
    kind = "invalid_status"

    def __init__(self, status: str, allowed):
        super().__init__(f"Invalid status: {status}. Must be one of: {', '.join(allowed)}")
