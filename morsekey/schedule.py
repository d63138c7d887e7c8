from typing import Callable

class ScheduledAction:
    def __init__(self, name: str, due_ms: float, callback: Callable[[], None], interval_ms: float | None,
                 order: int):
        self.name = name
        self.due_ms = due_ms
        self.callback = callback
        self.interval_ms = interval_ms
        self.order = order

class Scheduler:
    """ A virtual clock with a set of named, cancellable deferred actions. Time only moves when `advance()` is called;
        due actions run in order of their due time, actions due at the same time in the order they were scheduled.
        Scheduling an action under a name that is already in use cancels the existing action first, so an action never
        fires twice. All times are given in milliseconds. """
    def __init__(self, start_ms: float = 0.0):
        self._now_ms = start_ms
        self._actions: dict[str, ScheduledAction] = {}
        self._order = 0

    def now(self) -> float:
        return self._now_ms

    def schedule(self, name: str, delay_ms: float, callback: Callable[[], None]):
        """ Schedules a one-shot action that runs `delay_ms` from now. """
        self._add(name, delay_ms, callback, None)

    def schedule_periodic(self, name: str, interval_ms: float, callback: Callable[[], None]):
        """ Schedules an action that runs every `interval_ms`, starting one interval from now, until cancelled. """
        assert interval_ms > 0, "interval must be greater than 0"
        self._add(name, interval_ms, callback, interval_ms)

    def _add(self, name: str, delay_ms: float, callback: Callable[[], None], interval_ms: float | None):
        self.cancel(name)
        self._order += 1
        self._actions[name] = ScheduledAction(name, self._now_ms + max(delay_ms, 0), callback, interval_ms,
                                              self._order)

    def cancel(self, name: str) -> bool:
        """ Cancels the action with the given name. Returns `True` if there was such an action. """
        return self._actions.pop(name, None) is not None

    def cancel_all(self):
        self._actions.clear()

    def is_scheduled(self, name: str) -> bool:
        return name in self._actions

    def due(self, name: str) -> float | None:
        """ Returns the time the action with the given name runs next, or `None` if it is not scheduled. """
        action = self._actions.get(name)
        return action.due_ms if action is not None else None

    def num_scheduled(self) -> int:
        return len(self._actions)

    def next_due(self) -> float | None:
        if not self._actions:
            return None
        return min(action.due_ms for action in self._actions.values())

    def advance(self, duration_ms: float):
        """ Moves the clock forward by `duration_ms` and runs every action that becomes due on the way. Actions
            scheduled by callbacks run within the same call if they become due before the end of the duration. """
        self.advance_to(self._now_ms + max(duration_ms, 0))

    def advance_to(self, target_ms: float):
        while self._actions:
            action = min(self._actions.values(), key = lambda a: (a.due_ms, a.order))
            if action.due_ms > target_ms:
                break
            self._now_ms = max(self._now_ms, action.due_ms)
            if action.interval_ms is not None:
                self._order += 1
                action.due_ms += action.interval_ms
                action.order = self._order
            else:
                del self._actions[action.name]
            action.callback()
        self._now_ms = max(self._now_ms, target_ms)
