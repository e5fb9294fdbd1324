class ScoringError(Exception):
    """Base class for errors raised by the scoring engine"""


class ValidationRejected(ScoringError):
    """A submitted pick failed validation; `reason` is shown to the member"""

    def __init__(self, reason):
        super().__init__(reason)
        self.reason = reason


class InvalidResult(ScoringError):
    """A result is missing fields it needs to be scored"""
