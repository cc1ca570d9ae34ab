from __future__ import annotations

from typing import Callable, Generic, TypeVar

T = TypeVar("T")

Subscriber = Callable[[T], None]


class Writable(Generic[T]):
    """
    A single current value plus the callbacks interested in it.

    Subscribers are called immediately with the current value and then on
    every set/update, in subscription order.
    """

    def __init__(self, value: T) -> None:
        self._value = value
        self._subscribers: list[Subscriber[T]] = []

    def get(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        self._value = value
        for subscriber in list(self._subscribers):
            subscriber(value)

    def update(self, fn: Callable[[T], T]) -> None:
        self.set(fn(self._value))

    def subscribe(self, subscriber: Subscriber[T]) -> Callable[[], None]:
        self._subscribers.append(subscriber)
        subscriber(self._value)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe
