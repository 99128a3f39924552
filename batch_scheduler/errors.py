from __future__ import annotations

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_OUTPUT_ERROR = 3
EXIT_INVALID_PARAMETERS = 4


class SchedulerError(Exception):
    """Base class for failures that abort a simulation run."""

    exit_code = EXIT_INPUT_ERROR


class InputUnavailableError(SchedulerError):
    """The workload source cannot be opened or read."""


class MalformedRecordError(SchedulerError, ValueError):
    """A workload record does not have the expected shape."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class OutputUnavailableError(SchedulerError):
    """The report destination cannot be opened for writing."""

    exit_code = EXIT_OUTPUT_ERROR
