"""Observable value holder used for the store's reactive state."""

from typing import Callable, Generic, TypeVar

T = TypeVar("T")

Listener = Callable[[T], None]


class Observable(Generic[T]):
    """Holds a value and notifies subscribers whenever it is replaced.

    Reading is pull-based through ``get()``; ``subscribe()`` registers a
    callback invoked with the new value on every ``set()``.
    """

    def __init__(self, value: T):
        self._value = value
        self._listeners: list[Listener] = []

    def get(self) -> T:
        return self._value

    def set(self, value: T, notify: bool = True) -> None:
        """Replace the value; listeners run unless ``notify`` is False."""
        self._value = value
        if notify:
            self.notify()

    def notify(self) -> None:
        """Call every listener with the current value."""
        for listener in list(self._listeners):
            listener(self._value)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener and return a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def __repr__(self) -> str:
        return f"Observable({self._value!r})"
