import itertools
import threading
from typing import Dict, Set


class RoundScheduler:
    """Deferred per-room tasks, cancellable by room id.

    - Runs inline in TESTING mode unless ENABLE_SCHEDULER_IN_TESTS is set
    - Several tasks may be pending for one room; each fires independently
    - ``cancel`` aborts every pending task of a room before it fires
    """

    def __init__(self, app, sio):
        self.app = app
        self.sio = sio
        self._tokens = itertools.count(1)
        self._pending: Dict[str, Set[int]] = {}
        self._guard = threading.Lock()

    @property
    def inline(self) -> bool:
        config = self.app.config
        return bool(config.get('TESTING') and not config.get('ENABLE_SCHEDULER_IN_TESTS'))

    def schedule(self, room_id: str, delay: float, callback, *args) -> int:
        with self._guard:
            token = next(self._tokens)
            self._pending.setdefault(room_id, set()).add(token)
        self.app.logger.info(f"[timer-set] room={room_id} token={token} delay={delay}s")

        if self.inline:
            self._worker(room_id, token, 0, callback, args)
        else:
            self.sio.start_background_task(self._worker, room_id, token, delay, callback, args)
        return token

    def cancel(self, room_id: str) -> int:
        with self._guard:
            tokens = self._pending.pop(room_id, set())
        if tokens:
            self.app.logger.info(f"[timer-cancel] room={room_id} count={len(tokens)}")
        return len(tokens)

    def pending(self, room_id: str) -> int:
        with self._guard:
            return len(self._pending.get(room_id, ()))

    def _claim(self, room_id: str, token: int) -> bool:
        with self._guard:
            tokens = self._pending.get(room_id)
            if not tokens or token not in tokens:
                return False
            tokens.discard(token)
            if not tokens:
                del self._pending[room_id]
            return True

    def _worker(self, room_id, token, delay, callback, args):
        if delay:
            self.sio.sleep(delay)
        if not self._claim(room_id, token):
            self.app.logger.info(f"[timer-abort] room={room_id} token={token} cancelled")
            return
        self.app.logger.info(f"[timer-fire] room={room_id} token={token}")
        with self.app.app_context():
            callback(*args)


def run_room_reaper(app, sio, registry, scheduler) -> None:
    """Background loop dropping idle empty rooms every ROOM_REAP_INTERVAL_SEC."""
    ttl = int(app.config.get('ROOM_IDLE_TTL_SEC', 0))
    interval = max(1, int(app.config.get('ROOM_REAP_INTERVAL_SEC', 60)))
    if ttl <= 0:
        return
    while True:
        sio.sleep(interval)
        reap_rooms(app, registry, scheduler, ttl)


def reap_rooms(app, registry, scheduler, ttl) -> list:
    with registry.lock:
        reaped = registry.reap_idle(ttl)
    for room_id in reaped:
        scheduler.cancel(room_id)
    if reaped:
        app.logger.info(f"[reaper] removed {len(reaped)} idle room(s): {', '.join(reaped)}")
    return reaped
