"""Error taxonomy for the scheduling engine."""


class SchedulingError(Exception):
    """Base class for all errors raised by the engine."""


class InvalidRating(SchedulingError, ValueError):
    """A quality rating outside the 0-5 scale was submitted."""

    def __init__(self, quality: object, item_id: object | None = None):
        self.quality = quality
        self.item_id = item_id
        msg = f"Invalid quality rating {quality!r} (must be an integer 0-5)"
        if item_id is not None:
            msg += f" for item {item_id!r}"
        super().__init__(msg)


class InvalidHistory(SchedulingError, ValueError):
    """A review log entry is malformed."""

    def __init__(self, index: int, reason: str):
        self.index = index
        self.reason = reason
        super().__init__(f"Malformed review log entry at index {index}: {reason}")
