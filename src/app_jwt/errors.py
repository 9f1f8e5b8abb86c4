class AppJWTError(Exception):
    """Base class for all fatal errors raised while issuing a token."""


class ConfigurationError(AppJWTError):
    """A required input is missing, empty or out of range."""


class KeyLoadError(AppJWTError):
    """The private key cannot be read or is not an RSA private key."""


class SigningError(AppJWTError):
    """Signing or decoding a token failed."""


class InstallationTokenError(AppJWTError):
    """GitHub answered the token exchange without a usable token."""
