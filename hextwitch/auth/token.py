"""OAuth token validation against the Twitch identity endpoint."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

import aiohttp
from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from ..constants import (
    HTTP_REQUEST_TIMEOUT_SECONDS,
    RETRY_MAX_BACKOFF_SECONDS,
    TOKEN_VALIDATION_MAX_ATTEMPTS,
    TWITCH_VALIDATE_URL,
)
from ..errors.handling import is_retryable_error
from ..errors.internal import NetworkError, OAuthError, ParsingError
from ..logs.logger import logger
from ..utils import format_duration


@dataclass
class TokenInfo:
    """Identity behind a validated token.

    Attributes:
        login: Twitch login name of the token owner.
        user_id: Numeric user ID, as a string.
        client_id: Application the token was issued to.
        scopes: Granted scopes.
        expires_in: Seconds until expiry, if the server reported it.
    """

    login: str
    user_id: str
    client_id: str
    scopes: list[str] = field(default_factory=list)
    expires_in: int | None = None


class TokenClient:
    """Client for validating Twitch OAuth tokens.

    Network failures are retried with exponential backoff; a rejected token
    is never retried.
    """

    def __init__(
        self,
        http_session: aiohttp.ClientSession,
        max_attempts: int = TOKEN_VALIDATION_MAX_ATTEMPTS,
        max_backoff: float = RETRY_MAX_BACKOFF_SECONDS,
    ):
        self.session = http_session
        self.max_attempts = max_attempts
        self.max_backoff = max_backoff

    async def validate(self, access_token: str) -> TokenInfo:
        """Validate an access token remotely.

        Raises:
            OAuthError: The token was rejected.
            NetworkError: The endpoint could not be reached after retries.
            ParsingError: The endpoint answered with an unexpected body.
        """
        attempt = 0

        def before_sleep(retry_state) -> None:
            logger.log_event(
                "auth",
                "network_retry",
                logging.WARNING,
                attempt=retry_state.attempt_number,
            )

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=1, max=self.max_backoff),
            retry=retry_if_exception(is_retryable_error),
            before_sleep=before_sleep,
            reraise=True,
        )
        async for retry_attempt in retrying:
            with retry_attempt:
                attempt += 1
                return await self._validate_remote(access_token)
        raise NetworkError(f"Token validation gave up after {attempt} attempts")

    async def _validate_remote(self, access_token: str) -> TokenInfo:
        try:
            timeout = aiohttp.ClientTimeout(total=HTTP_REQUEST_TIMEOUT_SECONDS)
            headers = {"Authorization": f"OAuth {access_token}"}
            async with self.session.get(
                TWITCH_VALIDATE_URL, headers=headers, timeout=timeout
            ) as resp:
                if resp.status == 200:
                    data = await resp.json()
                    return self._parse(data)
                if resp.status == 401:
                    raise OAuthError("Token rejected by validation endpoint")
                raise NetworkError(f"HTTP {resp.status} during token validation")
        except TimeoutError as e:
            raise NetworkError("Token validation timeout") from e
        except aiohttp.ContentTypeError as e:
            raise ParsingError(f"Validation response is not JSON: {e}") from e
        except aiohttp.ClientError as e:
            raise NetworkError(f"Network error during validation: {e}") from e
        except ValueError as e:
            raise ParsingError(f"Malformed validation response: {e}") from e

    @staticmethod
    def _parse(data: object) -> TokenInfo:
        if not isinstance(data, dict):
            raise ParsingError("Validation response is not an object")
        try:
            login = str(data["login"])
            user_id = str(data["user_id"])
        except KeyError as e:
            raise ParsingError(f"Validation response missing {e}") from e
        expires_in = data.get("expires_in")
        info = TokenInfo(
            login=login,
            user_id=user_id,
            client_id=str(data.get("client_id", "")),
            scopes=[str(s) for s in data.get("scopes") or []],
            expires_in=int(expires_in) if isinstance(expires_in, int) else None,
        )
        logger.log_event(
            "auth",
            "validate_ok",
            login=info.login,
            expires_in=format_duration(info.expires_in),
        )
        return info


async def validate_token(access_token: str) -> TokenInfo:
    async with aiohttp.ClientSession() as session:
        return await TokenClient(session).validate(access_token)


def validate_token_blocking(access_token: str) -> TokenInfo:
    """Run a validation to completion on a private event loop.

    For worker threads only; never call this from the dispatch path.
    """
    return asyncio.run(validate_token(access_token))
