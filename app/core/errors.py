class SmartCartError(Exception):
    """Base class for errors raised by the store's own services."""


class AuthorizationError(SmartCartError):
    pass


class NotFoundError(SmartCartError):
    pass


class InvoiceRenderError(SmartCartError):
    pass


class MailDeliveryError(SmartCartError):
    pass
