"""
Error types raised by the VPAT generator
"""

from typing import Optional


class VPATError(Exception):
    """Base class for all VPAT errors"""


class RenderError(VPATError):
    """Raised when a renderer cannot produce or write its output"""

    def __init__(self, message: str, format: Optional[str] = None):
        super().__init__(message)
        self.format = format


class SerializationError(RenderError):
    """Raised when a report cannot be encoded to or decoded from JSON"""

    def __init__(self, message: str):
        super().__init__(message, format="json")


class ConfigError(VPATError):
    """Raised for malformed configuration values"""


class CheckError(VPATError):
    """Raised when accessibility results cannot be collected for a URL"""

    def __init__(self, message: str, url: str = ""):
        super().__init__(message)
        self.url = url


class InputError(VPATError):
    """Raised when saved results or URL lists cannot be read"""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path
