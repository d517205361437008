class BookingError(Exception):
    """Base class for booking failures reported back to the client."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class NotFoundError(BookingError):
    pass


class InvalidRequestError(BookingError):
    """The request refers to data that cannot be booked (inactive stylist, service without duration)."""


class SlotUnavailableError(BookingError):
    """The requested slot lies outside the valid intervals of the day."""


class SlotConflictError(BookingError):
    """The requested slot overlaps an existing appointment."""
