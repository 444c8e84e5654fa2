class SchedulerError(Exception):
    """Base class for errors raised by classtime."""


class InputTooLargeError(SchedulerError):
    """A class needs more periods than the week has slots. Retrying cannot help."""

    def __init__(self, class_name: str, required: int, available: int):
        self.class_name = class_name
        self.required = required
        self.available = available
        super().__init__(
            f'Class "{class_name}" requires {required} periods, but only {available} available.'
        )


class InfeasibleScheduleError(SchedulerError):
    """Every randomized attempt hit a teacher/room conflict."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(
            "Could not resolve conflicts. Try reducing constraints or subject frequency."
        )


class InvalidClassError(SchedulerError, ValueError):
    pass


class InvalidDatabaseError(SchedulerError, ValueError):
    pass
