"""Message prefixes: the origin of a line, either a server or a user mask."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ServerName:
    host: str

    def name(self) -> str:
        return self.host

    def server(self) -> str | None:
        return self.host

    def __str__(self) -> str:
        return self.host


@dataclass(frozen=True, slots=True)
class User:
    nick: str
    user: str | None = None
    host: str | None = None

    def name(self) -> str:
        return self.nick

    def server(self) -> str | None:
        return self.host

    def __str__(self) -> str:
        out = self.nick
        if self.user is not None:
            out += f"!{self.user}"
        if self.host is not None:
            out += f"@{self.host}"
        return out


Prefix = ServerName | User


def parse_prefix(token: str) -> Prefix:
    """Parse ``nick[!user][@host]`` or a bare server name.

    A token with a dot and no ``@`` is a server name. Never fails: an empty
    token is a user with an empty nick.
    """
    if "." in token and "@" not in token:
        return ServerName(token)
    nick_user, at, host = token.partition("@")
    nick, bang, user = nick_user.partition("!")
    # A delimiter with nothing after it still counts, so it survives formatting.
    return User(nick, user if bang else None, host if at else None)
