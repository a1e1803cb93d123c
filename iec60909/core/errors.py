"""
Exceptions raised during a fault impedance computation.

Every error aborts the whole computation. Errors raised by an element's
impedance model are attributed to the element kind and its 1-based
position in the network by the admittance assembler.
"""


class ShortCircuitError(Exception):
    """Base class for all calculation errors."""

    def __init__(self, message: str, kind: str | None = None, position: int | None = None):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.position = position

    def attribute(self, kind: str, position: int) -> "ShortCircuitError":
        """
        Attach the offending element to the error.

        Args:
            kind: Element kind (e.g. "transformer")
            position: 1-based position of the element in its collection

        Returns:
            The error itself, so it can be re-raised directly
        """
        self.kind = kind
        self.position = position
        return self

    def __str__(self) -> str:
        if self.kind is None:
            return self.message
        if self.position is None:
            return f"{self.kind} error: {self.message}"
        return f"{self.kind} {self.position} error: {self.message}"


class MissingRatingError(ShortCircuitError, ValueError):
    """A rating required by an impedance formula is not set."""


class InconsistentInputError(ShortCircuitError, ValueError):
    """Ratings contradict each other (e.g. uRr greater than ukr)."""


class ZeroImpedanceError(ShortCircuitError, ZeroDivisionError):
    """An element impedance is exactly zero."""


class UnresolvedNodeError(ShortCircuitError, KeyError):
    """An element references a node label that has no index."""

    def __str__(self) -> str:
        # KeyError would otherwise quote the message
        return ShortCircuitError.__str__(self)


class SingularSystemError(ShortCircuitError, RuntimeError):
    """The admittance matrix could not be factorized."""
