from app_jwt.errors import AppJWTError, ConfigurationError, InstallationTokenError, KeyLoadError, SigningError
from app_jwt.issuer import ClaimSet, TokenIssuer, issue_token

__all__ = [
    "AppJWTError",
    "ConfigurationError",
    "InstallationTokenError",
    "KeyLoadError",
    "SigningError",
    "ClaimSet",
    "TokenIssuer",
    "issue_token",
]
