"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class MissingDatasetError(DomainException):
    """No financial dataset supplied, or it holds no facts"""

    pass


class UnsupportedInputError(DomainException):
    """Dataset or bureau report is malformed"""

    pass


class UnsupportedSourceError(DomainException):
    """Data source is unknown or its type cannot be loaded"""

    pass


class BureauAPIError(DomainException):
    """Credit bureau API returned an error or is unavailable"""

    pass
