"""Authorization handoff between a worker thread and the dispatch path.

Obtaining and validating a token can block for minutes (the user has to
approve the application in a browser), so it runs as a one-shot job on a
worker thread. The dispatch path only ever polls the job's future.
"""

from __future__ import annotations

import logging
import secrets
import time
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlencode

from ..config import PreferenceStore
from ..constants import AUTH_WAIT_TIMEOUT_SECONDS, TWITCH_AUTHORIZE_URL
from ..errors import OAuthError, log_error
from ..logs.logger import logger
from .token import TokenInfo, validate_token_blocking

REDIRECT_URI = "http://localhost:3000"
SCOPES = ("chat:read", "chat:edit", "whispers:read", "whispers:edit")

# Blocks until the user completes authorization at ``url``; returns the
# token or None if authorization was abandoned.
Authorizer = Callable[[str], str | None]
Validator = Callable[[str], TokenInfo]


class ApiState(Enum):
    OFFLINE = "offline"
    WAITING = "waiting"
    ACTIVE = "active"


@dataclass
class PendingAuth:
    url: str
    future: Future[tuple[str, TokenInfo]]
    started: float


def authorization_url(client_id: str, state: str) -> str:
    query = urlencode(
        {
            "client_id": client_id,
            "redirect_uri": REDIRECT_URI,
            "response_type": "token",
            "scope": " ".join(SCOPES),
            "state": state,
        }
    )
    return f"{TWITCH_AUTHORIZE_URL}?{query}"


class ApiHandler:
    """Offline -> Waiting -> Active state machine around one background job.

    ``validate`` never blocks. While Offline it starts the job and moves to
    Waiting; while Waiting it checks the job's future and moves to Active or
    back to Offline once the job finishes or the wait times out.
    """

    def __init__(
        self,
        store: PreferenceStore,
        authorizer: Authorizer | None = None,
        validator: Validator = validate_token_blocking,
        clock: Callable[[], float] = time.monotonic,
        timeout: float = AUTH_WAIT_TIMEOUT_SECONDS,
    ) -> None:
        self.store = store
        self.authorizer = authorizer
        self.validator = validator
        self.clock = clock
        self.timeout = timeout
        self.state = ApiState.OFFLINE
        self.info: TokenInfo | None = None
        self._pending: PendingAuth | None = None
        self._executor: ThreadPoolExecutor | None = None

    @property
    def is_valid(self) -> bool:
        return self.state is ApiState.ACTIVE

    @property
    def is_waiting(self) -> bool:
        return self.state is ApiState.WAITING

    @property
    def url(self) -> str | None:
        """Authorization URL the user should open, while waiting."""
        return self._pending.url if self._pending is not None else None

    def validate(self) -> bool:
        match self.state:
            case ApiState.ACTIVE:
                return True
            case ApiState.OFFLINE:
                self._start()
                return False
            case _:
                return self._poll()

    def clear(self) -> None:
        """Forget the stored token and go Offline."""
        self.store.clear_token()
        self.stop()

    def stop(self) -> None:
        if self._pending is not None:
            self._pending.future.cancel()
        self._pending = None
        self.info = None
        self._set_state(ApiState.OFFLINE)

    def shutdown(self) -> None:
        self.stop()
        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = None

    def _set_state(self, new: ApiState) -> None:
        if new is not self.state:
            logger.log_event(
                "auth", "state_change", logging.DEBUG, old=self.state.value, new=new.value
            )
        self.state = new

    def _start(self) -> None:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=1, thread_name_prefix="hextwitch-auth"
            )
        url = authorization_url(
            self.store.get("client_id") or "", secrets.token_urlsafe(16)
        )
        future = self._executor.submit(self._job, url)
        self._pending = PendingAuth(url, future, self.clock())
        self._set_state(ApiState.WAITING)

    def _job(self, url: str) -> tuple[str, TokenInfo]:
        """Validate the stored token, or obtain a new one and validate that."""
        stored = self.store.get_token()
        if stored:
            logger.log_event("auth", "validate_start", logging.DEBUG)
            try:
                return stored, self.validator(stored)
            except OAuthError:
                self.store.clear_token()
                logger.log_event("auth", "token_rejected", logging.WARNING)
        if self.authorizer is None:
            raise OAuthError("No valid stored token and no way to authorize")
        token = self.authorizer(url)
        if not token:
            raise OAuthError("Authorization was not completed")
        return token, self.validator(token)

    def _poll(self) -> bool:
        pending = self._pending
        if pending is None:
            self._set_state(ApiState.OFFLINE)
            return False
        if not pending.future.done():
            if self.clock() - pending.started > self.timeout:
                logger.log_event(
                    "auth", "wait_timeout", logging.WARNING, seconds=self.timeout
                )
                self.stop()
            return False

        self._pending = None
        try:
            token, info = pending.future.result()
        except OAuthError as e:
            self.store.clear_token()
            log_error("Authorization failed", e)
            self._set_state(ApiState.OFFLINE)
            return False
        except Exception as e:  # noqa: BLE001
            log_error("Authorization failed", e)
            self._set_state(ApiState.OFFLINE)
            return False

        self.store.set_token(token)
        self.info = info
        self._set_state(ApiState.ACTIVE)
        return True
