"""Custom exceptions for the orchestration context."""


class MissingJobContextError(ValueError):
    """
    Exception raised when an operation needs a job but none was given.

    At least one of job title, company name or job description must be non-blank.
    """

    def __init__(self, action: str = "continue"):
        self.action = action
        super().__init__(f"Add at least a job title, company or job description to {action}")


class ProfileMissingError(ValueError):
    """Exception raised when generative tailoring is requested without a saved profile."""

    def __init__(self, user_id: str = None):
        self.user_id = user_id
        message = "Fill in the profile before using AI tailoring"
        if user_id:
            message += f" (no profile saved for user '{user_id}')"
        super().__init__(message)
