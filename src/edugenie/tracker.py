"""Per-screen in-flight request bookkeeping."""


class RequestTracker:
    """Hands out request tokens; only the newest one is still wanted.

    A screen calls begin() before it issues a generation call and accepts()
    when the result comes back. Starting a new request or leaving the screen
    makes older results stale; the underlying call is not cancelled.
    """

    def __init__(self):
        self._latest = 0
        self._pending = None

    @property
    def loading(self) -> bool:
        return self._pending is not None

    def begin(self) -> int:
        self._latest += 1
        self._pending = self._latest
        return self._latest

    def accepts(self, token: int) -> bool:
        if token != self._pending:
            return False
        self._pending = None
        return True

    def abandon(self) -> None:
        self._pending = None
