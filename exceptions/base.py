"""
Root of the order-engine exception hierarchy.
"""


class FoodtruckOrderException(Exception):
    """
    Any rejection raised while validating or storing an order.

    The HTTP layer catches this single type and answers with
    ``{"error": message}`` and ``http_status``.

    Attributes:
        message: French message shown to the customer or merchant
        details: Context for logs (ids, expected and claimed amounts), never sent to clients
        http_status: 400 unless a subclass overrides it
    """

    http_status: int = 400

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        context = ''.join(f", {key}={value}" for key, value in self.details.items())
        return f"{type(self).__name__}({self.message!r}{context})"
