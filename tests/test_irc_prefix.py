from hextwitch.irc import ServerName, User, parse_prefix


def test_server_name():
    prefix = parse_prefix("tmi.twitch.tv")
    assert prefix == ServerName("tmi.twitch.tv")
    assert prefix.name() == "tmi.twitch.tv"
    assert prefix.server() == "tmi.twitch.tv"
    assert str(prefix) == "tmi.twitch.tv"


def test_full_user_mask():
    prefix = parse_prefix("nick!user@host.tv")
    assert prefix == User("nick", "user", "host.tv")
    assert prefix.name() == "nick"
    assert prefix.server() == "host.tv"
    assert str(prefix) == "nick!user@host.tv"


def test_partial_user_masks():
    assert parse_prefix("nick") == User("nick")
    assert parse_prefix("nick!user") == User("nick", "user", None)
    assert parse_prefix("nick@host") == User("nick", None, "host")
    assert str(User("nick", None, "host")) == "nick@host"
    assert parse_prefix("nick").server() is None


def test_dot_with_at_is_a_user():
    assert isinstance(parse_prefix("a.b@c.d"), User)


def test_empty_prefix():
    assert parse_prefix("") == User("")
    assert str(parse_prefix("")) == ""


def test_empty_parts_keep_their_delimiters():
    assert parse_prefix("a.b@") == User("a.b", None, "")
    assert str(parse_prefix("a.b@")) == "a.b@"
    assert parse_prefix("nick!") == User("nick", "", None)
    assert str(parse_prefix("nick!@")) == "nick!@"


def test_empty_host_does_not_turn_into_server():
    prefix = parse_prefix("a.b@")
    assert parse_prefix(str(prefix)) == prefix
