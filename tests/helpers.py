"""Shared test helpers for TimeFlo."""

from timeflo.timer.session import Session


class FakeClock:
    """Controllable stand-in for ``time.monotonic``."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


def run_out(session: Session, clock: FakeClock) -> None:
    """Start the active interval and let its full duration pass."""
    timer = session.timer
    timer.start_or_resume()
    clock.advance(timer.remaining())
