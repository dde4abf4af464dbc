MESSAGE = "The quantum vector is not normalized."


class NormalizationError(ValueError):
    """Raised when a quantum vector's squared amplitudes do not sum to 1."""

    def __init__(self, message: str = MESSAGE):
        super().__init__(message)
