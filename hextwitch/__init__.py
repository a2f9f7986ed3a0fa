"""HexTwitch: IRCv3 line codec and Twitch chat presentation state."""

__version__ = "1.0.0"
