from app_jwt.github.app_auth import GitHubAppAuth

__all__ = ["GitHubAppAuth"]
