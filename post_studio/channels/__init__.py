"""The two redundant update channels for a flow's draft row."""
from post_studio.channels.poll_loop import PollLoop
from post_studio.channels.push_listener import PushListener, parse_change

__all__ = ["PollLoop", "PushListener", "parse_change"]
