"""Tests for the single-slot notifier."""

from construapp.application.notifications import Notifier, NotificationKind


class _Clock:

    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


class TestNotifier:

    def test_empty_slot(self):
        assert Notifier().current() is None

    def test_message_visible_until_ttl(self):
        clock = _Clock()
        notifier = Notifier(ttl=3.0, clock=clock)
        notifier.success("Saved")

        clock.now += 2.9
        assert notifier.current().message == "Saved"

        clock.now += 0.1
        assert notifier.current() is None

    def test_new_message_replaces_previous(self):
        clock = _Clock()
        notifier = Notifier(clock=clock)
        notifier.success("first")
        clock.now += 2.0
        notifier.error("second")

        clock.now += 2.0
        note = notifier.current()
        assert note.message == "second"
        assert note.kind is NotificationKind.ERROR

    def test_dismiss(self):
        notifier = Notifier()
        notifier.error("oops")
        notifier.dismiss()
        assert notifier.current() is None
