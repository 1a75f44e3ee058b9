"""Exceptions raised by the prepayment calculator."""


class PrepayCalcError(ValueError):
    """Base class for all calculator errors."""


class InvalidParameter(PrepayCalcError):
    """A loan parameter is missing, malformed or out of range."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
