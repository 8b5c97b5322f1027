"""Domain-specific exceptions"""


class MortgageMixError(Exception):
    """Base exception for the calculation engine"""

    pass


class InvalidArgument(MortgageMixError, ValueError):
    """Input values cannot produce a meaningful calculation"""

    pass


class RateFetchFailure(MortgageMixError):
    """Published rates could not be retrieved or parsed"""

    pass
