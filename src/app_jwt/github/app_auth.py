import httpx

from app_jwt.errors import InstallationTokenError
from app_jwt.issuer import TokenIssuer


class GitHubAppAuth:
    def __init__(self, issuer: TokenIssuer, api_url: str = "https://api.github.com"):
        self.issuer = issuer
        self.api_url = api_url.rstrip("/")

    def get_jwt(self) -> str:
        return self.issuer.issue()

    def access_tokens_url(self, installation_id: int) -> str:
        return f"{self.api_url}/app/installations/{installation_id}/access_tokens"

    def get_installation_token(self, installation_id: int) -> str:
        """Exchange a fresh App JWT for an installation access token.

        HTTP errors propagate as httpx exceptions; a 2xx answer that does not
        carry a token raises InstallationTokenError.
        """
        resp = httpx.post(
            self.access_tokens_url(installation_id),
            headers={
                "Authorization": f"Bearer {self.get_jwt()}",
                "Accept": "application/vnd.github+json",
            },
        )
        resp.raise_for_status()
        return _extract_token(resp, installation_id)


def _extract_token(resp: httpx.Response, installation_id: int) -> str:
    try:
        data = resp.json()
    except ValueError as e:
        raise InstallationTokenError(
            f"GitHub returned a non-JSON body for installation {installation_id}"
        ) from e

    token = data.get("token") if isinstance(data, dict) else None
    if not isinstance(token, str) or not token:
        raise InstallationTokenError(f"GitHub response for installation {installation_id} has no token")
    return token
