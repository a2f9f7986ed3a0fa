"""Server line handlers and the dispatcher that routes to them."""

from .dispatcher import EatMode, ServerEventDispatcher, split_prediction  # noqa: F401
from .usernotice import RENDERERS  # noqa: F401

__all__ = ["EatMode", "RENDERERS", "ServerEventDispatcher", "split_prediction"]
