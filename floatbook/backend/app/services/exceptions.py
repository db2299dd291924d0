# backend/app/services/exceptions.py


class PaymentProviderError(Exception):
    """A payment provider rejected a request or returned an unusable response"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BillingError(Exception):
    """A billing request is not allowed in the company's current state"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
