"""Errors raised while reading XCSP3 instances."""


class XcspParseError(ValueError):
    """Raised when an XCSP3 document does not have the expected structure."""