"""Server line dispatch.

Every raw line from the server passes through ``handle_line``, which parses
it, routes it by command and tells the host how much of its own default
handling to suppress. A handler that cannot build its output is reported as
an error line; it never propagates to the host.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from ..channel_state import ChannelState
from ..config import PreferenceStore
from ..errors import InternalError, log_error
from ..irc import Message, parse_message
from ..logs.logger import logger
from ..output import PrintEvent, PredictUpdate, TabColor
from ..utils import format_duration, parse_count
from .usernotice import RENDERERS, require

ACTION_PREFIX = "\x01ACTION "


class EatMode(Enum):
    NONE = "none"  # pass through
    HOST = "host"  # hide from the host's default printing
    ALL = "all"


def split_prediction(badges: str, badge_info: str) -> tuple[str, str] | None:
    """Find the ``predictions`` variant in ``badges`` and its label in ``badge-info``."""
    variant = None
    for pair in badges.split(","):
        badge_class, _, rank = pair.partition("/")
        if badge_class == "predictions":
            variant = rank
            break
    if variant is None:
        return None
    _, found, rest = badge_info.partition("predictions/")
    if not found:
        return None
    label, _, _ = rest.partition(",")
    return variant, label


def host_notice(viewers: str) -> str:
    try:
        count = int(viewers)
    except ValueError:
        return "Channel is hosted by"
    if count == 1:
        return "Channel is hosted, with 1 viewer, by"
    return f"Channel is hosted, with {count} viewers, by"


class ServerEventDispatcher:
    def __init__(self, state: ChannelState, prefs: PreferenceStore) -> None:
        self.state = state
        self.prefs = prefs
        self.output = state.output
        self._handlers: dict[str, Callable[[Message], EatMode]] = {
            "PRIVMSG": self._handle_privmsg,
            "WHISPER": self._handle_whisper,
            "ROOMSTATE": self._handle_roomstate,
            "USERSTATE": self._handle_userstate,
            "USERNOTICE": self._handle_usernotice,
            "CLEARMSG": self._handle_clearmsg,
            "CLEARCHAT": self._handle_clearchat,
            "HOSTTARGET": self._handle_hosttarget,
            "421": self._handle_unknown_command,
        }

    def handle_line(self, raw: str) -> EatMode:
        msg = parse_message(raw.rstrip("\r\n"))
        logger.log_event(
            "dispatch",
            "line",
            logging.DEBUG,
            command=msg.command,
            signature=msg.signature(),
        )
        handler = self._handlers.get(msg.command)
        if handler is None:
            return EatMode.NONE
        try:
            return handler(msg)
        except InternalError as e:
            # A known command whose handler failed is worth noticing even
            # outside debug mode.
            log_error(
                f"Handler for {msg.command} failed",
                e,
                {"signature": msg.signature()},
            )
            self.output.alert_error(
                msg.channel or "", f"Handler for IRC Command failed: {raw}"
            )
            return EatMode.NONE

    # Chat messages

    def _handle_privmsg(self, msg: Message) -> EatMode:
        channel = msg.channel or ""
        name = msg.get_tag("display-name") or msg.author
        badges = msg.get_tag("badges") or ""
        badge_info = msg.get_tag("badge-info") or ""

        prediction = split_prediction(badges, badge_info)
        if prediction is not None:
            variant, label = prediction
            update = self.state.observe_prediction(
                channel, variant, label, self.prefs.debug
            )
            if update is not PredictUpdate.NONE:
                self.output.alert_basic(channel, self.state.prediction_report(channel))

        bits = parse_count(msg.get_tag("bits"))
        if bits is not None:
            self.output.cheer(channel, name, bits)

        text = msg.trail
        reward_id = msg.get_tag("custom-reward-id")
        if reward_id is not None:
            reward = self.prefs.get_reward(reward_id)
            if reward is not None:
                fields = [reward, f"{name}:", text]
            else:
                fields = ["CUSTOM", f"({reward_id}) {name}:", text]
            self.output.echo(channel, PrintEvent.REWARD, fields, TabColor.MESSAGE)
            return EatMode.ALL
        if msg.get_tag("msg-id") == "highlighted-message":
            self.output.echo(channel, PrintEvent.ALERT, [name, text], TabColor.MESSAGE)
            return EatMode.ALL

        event = PrintEvent.CHANNEL_MESSAGE
        if text.startswith(ACTION_PREFIX):
            event = PrintEvent.CHANNEL_ACTION
            text = text[len(ACTION_PREFIX) :].rstrip("\x01")
        rendered = self.state.render_badges(badges, badge_info)
        self.output.echo(
            channel, event, [name, text, "", rendered.text()], TabColor.MESSAGE
        )
        return EatMode.ALL

    def _handle_whisper(self, msg: Message) -> EatMode:
        user = msg.author
        text = msg.trail
        action = text.startswith("/me ")
        if action:
            text = text[4:]
        if self.prefs.get("whispers_in_current") and not self.state.host.is_focused(
            user
        ):
            event = PrintEvent.PRIVATE_ACTION if action else PrintEvent.PRIVATE_MESSAGE
            self.state.host.print_event("", event, [user, text])

        # Reshaped so the client files it under a private tab for the author.
        msg.command = "PRIVMSG"
        if msg.args:
            msg.args[0] = user
        else:
            msg.args.append(user)
        msg.trail = f"{ACTION_PREFIX}{text}\x01" if action else text
        self.state.host.command(f"RECV {msg}")
        return EatMode.ALL

    # Status updates

    def _handle_roomstate(self, msg: Message) -> EatMode:
        if msg.tags is None:
            raise InternalError("ROOMSTATE without tags")
        channel = msg.channel or ""
        pairs = [(key, msg.get_tag(key) or "") for key in msg.tags]
        report = self.state.update_room_state(channel, pairs)
        if report.join:
            logger.log_event(
                "roomstate",
                "join_snapshot",
                logging.DEBUG,
                channel=channel,
                tags=msg.tag_count(),
            )
        for line in report.lines:
            self.output.echo(channel, PrintEvent.NORMAL, [line], TabColor.NONE)
        for key, value in report.unknown:
            logger.log_event(
                "roomstate",
                "unknown_key",
                logging.WARNING,
                channel=channel,
                key=key,
                value=value,
            )
            self.output.echo(
                channel,
                PrintEvent.NORMAL,
                [f"Unknown RoomState {key!r} has value {value!r}."],
                TabColor.NONE,
            )
        return EatMode.HOST

    def _handle_userstate(self, msg: Message) -> EatMode:
        channel = msg.channel or ""
        changed = self.state.set_user_badges(
            channel, msg.get_tag("badges") or "", msg.get_tag("badge-info") or ""
        )
        if changed is not None:
            self.output.echo(
                channel,
                PrintEvent.REWARD,
                ["BADGES", "New Badges received:", self.state.user_badges(channel)],
                TabColor.NONE,
            )
        return EatMode.ALL

    def _handle_usernotice(self, msg: Message) -> EatMode:
        channel = msg.channel or ""
        stype = require(msg, "msg-id")
        renderer = RENDERERS.get(stype)
        if renderer is not None:
            renderer(self.output, channel, msg, stype)
            return EatMode.HOST

        logger.log_event(
            "dispatch",
            "unknown_usernotice",
            logging.DEBUG,
            channel=channel,
            msg_id=stype,
        )
        if self.prefs.debug:
            self.output.alert_error(channel, f"Unknown SType {stype!r}: {msg}")
        system_msg = msg.get_tag("system-msg")
        if system_msg is not None:
            self.output.echo(
                channel, PrintEvent.ALERT, ["UNKNOWN", system_msg], TabColor.EVENT
            )
        return EatMode.HOST

    def _handle_hosttarget(self, msg: Message) -> EatMode:
        channel = msg.channel or ""
        target, _, viewers = msg.trail.partition(" ")
        if target and target != "-":
            hashtarget = f"#{target}"
            self.output.echo(
                channel,
                PrintEvent.CHANNEL,
                [hashtarget, f"https://twitch.tv/{target}"],
                TabColor.EVENT,
            )
            self.state.host.print_event(
                hashtarget, PrintEvent.REWARD, ["HOST", host_notice(viewers), channel]
            )
            if self.prefs.get("follow_hosts"):
                self.state.host.command(f"JOIN {hashtarget}")
        return EatMode.HOST

    # Moderator actions

    def _handle_clearmsg(self, msg: Message) -> EatMode:
        self.output.alert_error(
            msg.channel or "",
            f"A message by <{require(msg, 'login')}> is deleted: {msg.trail}",
        )
        return EatMode.HOST

    def _handle_clearchat(self, msg: Message) -> EatMode:
        channel = msg.channel or ""
        if not msg.trail:
            self.output.alert_error(channel, "Chat has been cleared by a moderator")
            return EatMode.HOST
        duration = msg.get_tag("ban-duration")
        if duration is not None:
            seconds = parse_count(duration)
            text = f"{msg.trail} is timed out for {format_duration(seconds)}"
        else:
            text = f"{msg.trail} is banned permanently"
        reason = msg.get_tag("ban-reason")
        if reason:
            text += f". Reason: {reason}"
        self.output.alert_error(channel, text)
        return EatMode.HOST

    # Other

    def _handle_unknown_command(self, msg: Message) -> EatMode:
        # Twitch implements neither WHO nor WHOIS; the client asks anyway.
        if msg.trail == "Unknown command" and len(msg.args) > 1:
            if msg.args[1] in ("WHO", "WHOIS"):
                return EatMode.HOST
        return EatMode.NONE
