"""Email channel factory. ``EMAIL_CHANNEL`` selects the adapter; ``fake`` is the default."""

import os

from storefront.notification.channel.email_port import EmailPort

_email_channel: EmailPort | None = None


def get_email_channel() -> EmailPort:
    global _email_channel
    if _email_channel is None:
        adapter = os.environ.get("EMAIL_CHANNEL", "fake")
        if adapter == "fake":
            from storefront.notification.channel.fake_email import FakeEmailAdapter

            _email_channel = FakeEmailAdapter()
        else:
            raise ValueError(f"Unknown email channel: {adapter}")
    return _email_channel


def set_email_channel(channel: EmailPort) -> None:
    global _email_channel
    _email_channel = channel


def reset_email_channel() -> None:
    global _email_channel
    _email_channel = None
