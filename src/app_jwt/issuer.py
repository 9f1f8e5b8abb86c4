import time
from dataclasses import dataclass
from pathlib import Path

import jwt
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey, RSAPublicKey
from cryptography.hazmat.primitives.serialization import load_pem_private_key, load_pem_public_key

from app_jwt.config import MAX_LIFETIME_SECONDS, Settings
from app_jwt.errors import ConfigurationError, KeyLoadError, SigningError

ALGORITHM = "RS256"
CLOCK_SKEW_SECONDS = 60


@dataclass(frozen=True)
class ClaimSet:
    issued_at: int
    expires_at: int
    issuer: str

    def to_payload(self) -> dict:
        return {"iat": self.issued_at, "exp": self.expires_at, "iss": self.issuer}


def _require_issuer(issuer_id: str) -> str:
    if issuer_id is None or not issuer_id.strip():
        raise ConfigurationError("Issuer identifier (GitHub App ID) is not set")
    return issuer_id


def _require_key_path(key_path: str | Path) -> Path:
    # Path("") resolves to ".", so blank values must be caught on the raw input
    if key_path is None or not str(key_path).strip():
        raise ConfigurationError("Private key path is not set")
    return Path(key_path)


def load_signing_key(key_path: str | Path) -> RSAPrivateKey:
    """Read a PEM file and return the unencrypted RSA private key it holds."""
    path = Path(key_path)
    try:
        pem = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise KeyLoadError(f"Unable to read private key {path}: {e}") from e

    try:
        key = load_pem_private_key(pem.encode(), password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise KeyLoadError(f"Unable to parse private key {path}: {e}") from e

    if not isinstance(key, RSAPrivateKey):
        raise KeyLoadError(f"Private key {path} is not an RSA key")
    return key


def build_claims(
    issuer_id: str,
    now: int | None = None,
    clock_skew: int = CLOCK_SKEW_SECONDS,
    lifetime: int = MAX_LIFETIME_SECONDS,
) -> ClaimSet:
    _require_issuer(issuer_id)
    if clock_skew < 0:
        raise ConfigurationError(f"Clock skew must not be negative, got {clock_skew}")
    if not 0 < lifetime <= MAX_LIFETIME_SECONDS:
        raise ConfigurationError(
            f"Token lifetime must be between 1 and {MAX_LIFETIME_SECONDS} seconds, got {lifetime}"
        )

    if now is None:
        now = int(time.time())
    return ClaimSet(issued_at=now - clock_skew, expires_at=now + lifetime, issuer=issuer_id)


def sign_claims(claims: ClaimSet, key: RSAPrivateKey) -> str:
    try:
        return jwt.encode(claims.to_payload(), key, algorithm=ALGORITHM)
    except (jwt.PyJWTError, ValueError, TypeError) as e:
        raise SigningError(f"Unable to sign token: {e}") from e


def issue_token(
    key_path: str | Path,
    issuer_id: str,
    *,
    now: int | None = None,
    clock_skew: int = CLOCK_SKEW_SECONDS,
    lifetime: int = MAX_LIFETIME_SECONDS,
) -> str:
    """Return a compact RS256 JWT for ``issuer_id`` signed with the key at ``key_path``.

    The issuer and key path are checked before the key file is touched, so a
    missing App ID or a blank key path fails without any I/O.
    """
    _require_issuer(issuer_id)
    path = _require_key_path(key_path)
    key = load_signing_key(path)
    claims = build_claims(issuer_id, now=now, clock_skew=clock_skew, lifetime=lifetime)
    return sign_claims(claims, key)


def load_public_key(key_path: str | Path) -> RSAPublicKey:
    path = Path(key_path)
    try:
        key = load_pem_public_key(path.read_bytes())
    except OSError as e:
        raise KeyLoadError(f"Unable to read public key {path}: {e}") from e
    except (ValueError, UnsupportedAlgorithm) as e:
        raise KeyLoadError(f"Unable to parse public key {path}: {e}") from e

    if not isinstance(key, RSAPublicKey):
        raise KeyLoadError(f"Public key {path} is not an RSA key")
    return key


def decode_token(token: str, public_key: RSAPublicKey | None = None) -> tuple[dict, dict]:
    """Split a token into its header and claims.

    The signature is checked only when ``public_key`` is given. Expiry is never
    enforced, so stale tokens can still be inspected.
    """
    options = {"verify_exp": False, "verify_iat": False, "verify_nbf": False}
    try:
        header = jwt.get_unverified_header(token)
        if public_key is None:
            claims = jwt.decode(token, options={"verify_signature": False, **options})
        else:
            claims = jwt.decode(token, public_key, algorithms=[ALGORITHM], options=options)
    except jwt.PyJWTError as e:
        raise SigningError(f"Invalid token: {e}") from e
    return header, claims


class TokenIssuer:
    def __init__(self, settings: Settings):
        self.settings = settings
        self._key: RSAPrivateKey | None = None

    @property
    def key(self) -> RSAPrivateKey:
        if self._key is None:
            self._key = load_signing_key(self.settings.github_private_key_path)
        return self._key

    def issue(self, now: int | None = None) -> str:
        claims = build_claims(
            self.settings.github_app_id,
            now=now,
            clock_skew=self.settings.jwt_clock_skew,
            lifetime=self.settings.jwt_lifetime,
        )
        return sign_claims(claims, self.key)
