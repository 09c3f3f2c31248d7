"""
Exceptions raised by Dinner Debt helpers
"""


class DinnerDebtError(Exception):
    """Base class for all Dinner Debt errors"""


class ExpressionError(DinnerDebtError, ValueError):
    """A typed arithmetic expression could not be evaluated"""

    def __init__(self, message: str, position: int = -1):
        super().__init__(message)
        self.position = position


class ReceiptReadError(DinnerDebtError):
    """A receipt image could not be read or parsed"""
