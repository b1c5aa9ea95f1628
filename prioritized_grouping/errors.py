"""Exceptions raised by the grouping pipeline."""


class GroupingError(ValueError):
    """Base class for all grouping errors."""


class DataFormatError(GroupingError):
    """Raised when the input table or file does not have the expected shape."""


class ConfigurationError(GroupingError):
    """Raised when capacities or the pre-grouping are inconsistent with the data."""


class InfeasibleAssignmentError(GroupingError):
    """Raised when the solver finds no optimal assignment."""

    def __init__(self, status: str):
        self.status = status
        super().__init__(
            f"The solver was not able to solve the problem (status: {status}). "
            "Please adjust the constraints by increasing group capacities "
            "and/or excess fill."
        )


class SolverTimeLimitError(GroupingError):
    """Raised when the solver reaches its time limit without any assignment."""

    def __init__(self, time_limit: float):
        self.time_limit = time_limit
        super().__init__(
            f"The solver found no assignment within the time limit of {time_limit:g} "
            "seconds. Please increase the time limit."
        )
