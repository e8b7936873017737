# core/exceptions.py

class AntennaLabError(Exception):
    """Base exception for antennalab errors."""
    pass

class DesignValidationError(AntennaLabError):
    """Raised when a design file or design field fails validation."""
    pass

class MatchingNetworkError(AntennaLabError):
    """Raised when an unknown matching network is requested."""
    pass

class SweepConfigError(AntennaLabError):
    """Raised when a sweep configuration is malformed."""
    pass
