GENERIC_ERROR_MESSAGE = (
    "An unexpected error occurred during analysis. "
    "Please check the post content and try again."
)


class AnalysisError(Exception):
    """Base class; ``str(exc)`` is always safe to show to the end user."""


class InputTooShort(AnalysisError, ValueError):
    def __init__(self, min_length: int):
        self.min_length = min_length
        super().__init__(f"Post text must be at least {min_length} characters long.")


class InputTooLong(AnalysisError, ValueError):
    def __init__(self, max_length: int):
        self.max_length = max_length
        super().__init__(f"Post text cannot exceed {max_length} characters.")


class UnexpectedComputationError(AnalysisError):
    def __init__(self, message: str = GENERIC_ERROR_MESSAGE):
        super().__init__(message)
