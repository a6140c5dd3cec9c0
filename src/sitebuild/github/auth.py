"""GitHub token loading.

Tokens come from an explicit value, an environment variable, or the GitHub
CLI. Public repository metadata can also be fetched anonymously at a lower
rate limit.
"""

import logging
import os
import re
import subprocess

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """Raised when a token is required but missing, or is malformed."""


def _get_gh_cli_token() -> str | None:
    """Try `gh auth token`, returning None when unavailable."""
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=5,
            check=False,
        )
    except FileNotFoundError:
        logger.debug("gh CLI not found")
        return None
    except subprocess.TimeoutExpired:
        logger.debug("gh CLI command timed out after 5 seconds")
        return None

    if result.returncode != 0:
        logger.debug("gh CLI returned exit code %d", result.returncode)
        return None
    return result.stdout.strip() or None


class GitHubAuth:
    """GitHub authentication manager.

    Accepted token formats: ``ghp_``/``gho_``/``ghu_``/``ghs_`` prefixed
    tokens, ``github_pat_`` fine-grained tokens, and classic 40 character
    hex tokens.
    """

    VALID_PREFIXES = ("ghp_", "gho_", "ghu_", "ghs_", "github_pat_")
    CLASSIC_TOKEN_PATTERN = re.compile(r"^[a-f0-9]{40}$")

    def __init__(
        self,
        token: str | None = None,
        token_env: str = "GITHUB_TOKEN",
        allow_anonymous: bool = False,
    ) -> None:
        """Initialize GitHub authentication.

        Args:
            token: Explicit token. Takes precedence over other sources.
            token_env: Environment variable checked next.
            allow_anonymous: Proceed without a token instead of raising.

        Raises:
            AuthenticationError: If no token is found and anonymous access is
                not allowed, or if the token format is invalid.
        """
        source = None
        if token:
            source = "explicit parameter"
        elif os.environ.get(token_env):
            token = os.environ[token_env]
            source = f"{token_env} environment variable"
        else:
            token = _get_gh_cli_token()
            if token:
                source = "gh CLI"

        if not token:
            if not allow_anonymous:
                raise AuthenticationError(
                    f"GitHub token not found. Set {token_env}, pass a token explicitly, "
                    "or authenticate with `gh auth login`."
                )
            logger.info("No GitHub token found, using anonymous access")
        else:
            logger.info("Using GitHub token from %s", source)

        self._token: str | None = token
        if self._token:
            self._validate_token()

    def _validate_token(self) -> None:
        token = self._token or ""
        has_valid_prefix = token.startswith(self.VALID_PREFIXES)
        is_classic = bool(self.CLASSIC_TOKEN_PATTERN.match(token))

        if not has_valid_prefix and not is_classic:
            raise AuthenticationError(
                f"Invalid token format. Expected prefix {self.VALID_PREFIXES} "
                "or 40-character hex string (classic token)"
            )
        if has_valid_prefix and len(token) < 20:
            raise AuthenticationError("Token appears too short to be valid")

    @property
    def token(self) -> str | None:
        """The validated token, or None for anonymous access."""
        return self._token

    @property
    def is_anonymous(self) -> bool:
        """Whether requests are sent without credentials."""
        return self._token is None

    def get_authorization_header(self) -> dict[str, str]:
        """Authorization header for API requests (empty when anonymous)."""
        if self._token is None:
            return {}
        return {"Authorization": f"token {self._token}"}
