"""exceptions raised by cjrank"""


class CJRankError(Exception):
    """Base class for all cjrank errors."""


class InsufficientItemsError(CJRankError, ValueError):
    """Raised when a ranking session is started or scored with fewer than 2 items."""

    def __init__(self, num_items: int, action: str = 'rank'):
        self.num_items = num_items
        super().__init__(f'need at least 2 items to {action}, got {num_items}')


class InvalidJudgmentError(CJRankError, ValueError):
    """
    Raised when a judgment does not fit the scheduler's current state:
    the winner is not in the current pair, the pair index is stale,
    or every pair has already been judged.
    """


class DomainError(CJRankError, ValueError):
    """Raised when a numeric function is called outside of its domain."""
