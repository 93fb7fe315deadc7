"""
Error taxonomy for the grabber.

Every failure that should end the run with a non-zero exit code derives from
VodafoneEPGError so the CLI can handle them in one place.
"""


class VodafoneEPGError(Exception):
    """Base class for grabber errors"""
    pass


class DataError(VodafoneEPGError):
    """Raised when a bundled or supplied data resource cannot be read"""
    pass


class EncodingError(VodafoneEPGError, ValueError):
    """Raised when text cannot be strictly encoded as UTF-8"""
    pass


class FetchError(VodafoneEPGError):
    """Raised when the provider API returns an undecodable envelope"""
    pass


class ConfigurationError(VodafoneEPGError):
    """Raised for missing or invalid grabber configuration"""
    pass
