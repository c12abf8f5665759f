"""Python client for the Prepr headless CMS."""

from .client import PreprClient, create_prepr_client
from .config import ClientOptions
from .errors import AddressParseError, ConfigurationError, DecodeError, PreprError, RequestTimeoutError

__all__ = [
    "AddressParseError",
    "ClientOptions",
    "ConfigurationError",
    "DecodeError",
    "PreprClient",
    "PreprError",
    "RequestTimeoutError",
    "create_prepr_client",
]
