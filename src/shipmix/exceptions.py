"""Error kinds raised or recorded by the assignment pipeline."""


class ShipmixError(Exception):
    """Base class for all shipmix errors."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message


class InvalidOrderRecord(ShipmixError):
    """An order row is malformed. The row is rejected, the batch goes on."""

    def __init__(self, order_id, reason):
        self.order_id = order_id
        self.reason = reason
        super().__init__(f'Order {order_id!r} rejected: {reason}')


class InvalidServiceRecord(ShipmixError):
    """The service catalog breaks one of its invariants."""

    def __init__(self, delivery_service, service_type, reason):
        self.delivery_service = delivery_service
        self.service_type = service_type
        self.reason = reason
        super().__init__(
            f'Service {delivery_service!r}/{service_type!r} is invalid: {reason}'
        )


class NoFeasibleService(ShipmixError):
    """No carrier offers a service meeting both constraints for an order."""

    def __init__(self, order_id):
        self.order_id = order_id
        super().__init__(f'Order {order_id!r} has no feasible service across any carrier')


class UnknownCarrierPriority(ShipmixError):
    """Carriers appear in the catalog without a configured tie-break rank."""

    def __init__(self, carriers):
        self.carriers = sorted(carriers)
        super().__init__(
            f'No carrier_rank configured for: {", ".join(self.carriers)}'
        )
