"""USERNOTICE rendering: subscriptions, gifts, raids and friends.

Each renderer returns nothing and prints through ``Output``; a missing
required tag raises ``ParsingError`` which the dispatcher reports.
"""

from __future__ import annotations

from collections.abc import Callable

from ..errors import ParsingError
from ..irc import Message
from ..output import Output, PrintEvent, TabColor
from ..utils import parse_count

MONTHS = {
    "1": "January",
    "2": "February",
    "3": "March",
    "4": "April",
    "5": "May",
    "6": "June",
    "7": "July",
    "8": "August",
    "9": "September",
    "10": "October",
    "11": "November",
    "12": "December",
}


def require(msg: Message, key: str) -> str:
    value = msg.get_tag(key)
    if value is None:
        raise ParsingError(f"{msg.command} is missing tag {key!r}", data={"key": key})
    return value


def _int(value: str | None) -> int:
    try:
        return int(value) if value is not None else 0
    except ValueError:
        return 0


def _plan(msg: Message) -> str:
    plan = msg.get_tag("msg-param-sub-plan")
    match plan:
        case None | "1000":
            return ""
        case "Prime":
            return " with Prime"
        case "2000":
            return " at Tier 2 ($10)"
        case "3000":
            return " at Tier 3 ($25)"
        case _:
            return f" with plan {plan!r}"


def _streaks(msg: Message, streak_key: str) -> str:
    out = ""
    streak = msg.get_tag(streak_key)
    if _int(streak) > 1:
        out += f" for ({streak}) months in a row"
    cumulative = msg.get_tag("msg-param-cumulative-months")
    if _int(cumulative) > 1:
        out += f", with ({cumulative}) months in total"
    return out


def _trail(msg: Message) -> str:
    return f": {msg.trail}" if msg.trail else ""


def sub(out: Output, channel: str, msg: Message, stype: str) -> None:
    line = f"<{require(msg, 'login')}> {stype}scribes"
    line += _plan(msg)
    line += _streaks(msg, "msg-param-streak-months")
    out.alert_subscription(channel, line + _trail(msg))


def extendsub(out: Output, channel: str, msg: Message, stype: str) -> None:
    line = f"<{require(msg, 'login')}> extends a sub"
    line += _plan(msg)
    line += _streaks(msg, "msg-param-streak-months")
    month = msg.get_tag("msg-param-sub-benefit-end-month")
    if month is not None:
        line += f", through {MONTHS.get(month, month)}"
    out.alert_subscription(channel, line + _trail(msg))


def subgift(out: Output, channel: str, msg: Message, stype: str) -> None:
    line = (
        f"<{require(msg, 'msg-param-recipient-user-name')}> is gifted a "
        f"subscription by <{require(msg, 'login')}>"
    )
    gifts = msg.get_tag("msg-param-sender-count")
    if _int(gifts) > 0:
        line += f" (Gifts: {gifts})"
    line += _streaks(msg, "msg-param-months")
    out.alert_subscription(channel, line)


def submysterygift(out: Output, channel: str, msg: Message, stype: str) -> None:
    num = require(msg, "msg-param-mass-gift-count")
    out.alert_subscription(
        channel,
        f"<{require(msg, 'login')}> gives out ({num}) random gift "
        f"subscription{'' if num == '1' else 's'}",
    )


def standardpayforward(out: Output, channel: str, msg: Message, stype: str) -> None:
    login = require(msg, "login")
    recipient = require(msg, "msg-param-recipient-user-name")
    prior = msg.get_tag("msg-param-prior-gifter-user-name")
    if prior is not None:
        text = f"<{login}> pays forward a gift subscription from <{prior}> to <{recipient}>"
    else:
        text = f"<{login}> pays forward an anonymous gift subscription to <{recipient}>"
    out.alert_basic(channel, text)


def communitypayforward(out: Output, channel: str, msg: Message, stype: str) -> None:
    login = require(msg, "login")
    prior = msg.get_tag("msg-param-prior-gifter-user-name")
    if prior is not None:
        text = f"<{login}> pays forward a gift subscription from <{prior}> to the community"
    else:
        text = f"<{login}> pays forward an anonymous gift subscription to the community"
    out.alert_basic(channel, text)


def giftpaidupgrade(out: Output, channel: str, msg: Message, stype: str) -> None:
    out.alert_sub_upgrade(
        channel,
        f"<{require(msg, 'login')}> upgrades a gift subscription from "
        f"<{require(msg, 'msg-param-sender-login')}>",
    )


def anongiftpaidupgrade(out: Output, channel: str, msg: Message, stype: str) -> None:
    out.alert_sub_upgrade(
        channel, f"<{require(msg, 'login')}> upgrades an anonymous gift subscription"
    )


def primepaidupgrade(out: Output, channel: str, msg: Message, stype: str) -> None:
    out.alert_sub_upgrade(
        channel, f"<{require(msg, 'login')}> upgrades a Prime subscription"
    )


def raid(out: Output, channel: str, msg: Message, stype: str) -> None:
    out.alert_basic(
        channel,
        f"A raid of {require(msg, 'msg-param-viewerCount')} arrives from "
        f"#{require(msg, 'msg-param-displayName').lower()}",
    )


def unraid(out: Output, channel: str, msg: Message, stype: str) -> None:
    out.alert_basic(channel, "A raid has been canceled")


def system_message(out: Output, channel: str, msg: Message, stype: str) -> None:
    out.alert_basic(channel, require(msg, "system-msg"))


def bitsbadgetier(out: Output, channel: str, msg: Message, stype: str) -> None:
    login = require(msg, "login")
    bits = parse_count(msg.get_tag("msg-param-threshold"))
    if bits is not None:
        notif = (
            f"<{login}> earns a new tier of Bits Badge for cheering {bits} Bits "
            f"(${bits / 100:.2f}) total"
        )
    else:
        notif = f"<{login}> earns a new tier of Bits Badge"
    out.echo(channel, PrintEvent.ALERT, ["BADGE", notif + _trail(msg)], TabColor.EVENT)


Renderer = Callable[[Output, str, Message, str], None]

RENDERERS: dict[str, Renderer] = {
    "sub": sub,
    "resub": sub,
    "extendsub": extendsub,
    "subgift": subgift,
    "submysterygift": submysterygift,
    "standardpayforward": standardpayforward,
    "communitypayforward": communitypayforward,
    "giftpaidupgrade": giftpaidupgrade,
    "anongiftpaidupgrade": anongiftpaidupgrade,
    "primepaidupgrade": primepaidupgrade,
    "raid": raid,
    "unraid": unraid,
    "charity": system_message,
    "rewardgift": system_message,
    "ritual": system_message,
    "bitsbadgetier": bitsbadgetier,
}
