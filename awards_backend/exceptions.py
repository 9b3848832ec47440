"""
awards_backend/exceptions.py
Typed exceptions for the judging automation

Precondition failures are raised before any mutation so a batch that
fails here leaves the store untouched.
"""


class AwardsAutomationError(Exception):
    """Base exception for judging automation errors"""
    status_code: int = 500
    code: str = "AUTOMATION_ERROR"

    def __init__(self, message: str, status_code: int = None):
        self.message = message
        if status_code:
            self.status_code = status_code
        super().__init__(self.message)


class NoJudgesAvailableError(AwardsAutomationError):
    """
    Raised when judge assignment starts with no active judges.
    """
    status_code = 409
    code = "NO_JUDGES_AVAILABLE"

    def __init__(self, message: str = "No active judges found"):
        super().__init__(message, self.status_code)


class AwardNotFoundError(AwardsAutomationError):
    """
    Raised when an award id does not exist.
    """
    status_code = 404
    code = "AWARD_NOT_FOUND"

    def __init__(self, award_id: int):
        self.award_id = award_id
        super().__init__(f"Award with id '{award_id}' not found", self.status_code)


class InvalidAutomationParameterError(AwardsAutomationError):
    """
    Raised for out-of-range batch parameters.

    Examples:
    - top_n below 1
    - judges_per_entry below 1
    """
    status_code = 400
    code = "INVALID_PARAMETER"

    def __init__(self, message: str = "Invalid automation parameter"):
        super().__init__(message, self.status_code)
