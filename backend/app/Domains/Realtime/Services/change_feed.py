import asyncio
import inspect
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Callable, Dict, List, Optional, Tuple

from loguru import logger

from app.Domains.Realtime.Models.change_event import ChangeEvent

Callback = Callable[[ChangeEvent], Any]


def _as_text(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class RowFilter:
    """A single PostgREST-style row filter: `column=eq.value`, `neq`, or `in.(a,b)`."""

    column: str
    operator: str
    values: Tuple[str, ...]

    @classmethod
    def parse(cls, expression: str) -> "RowFilter":
        column, sep, rest = expression.partition("=")
        operator, dot, value = rest.partition(".")
        if not column or not sep or not dot or operator not in ("eq", "neq", "in"):
            raise ValueError(f"Unsupported realtime filter: {expression!r}")

        if operator == "in":
            items = value.strip().removeprefix("(").removesuffix(")")
            values = tuple(v.strip().strip('"') for v in items.split(",") if v.strip())
        else:
            values = (value,)
        return cls(column=column.strip(), operator=operator, values=values)

    def matches(self, row: Dict[str, Any]) -> bool:
        actual = _as_text(row.get(self.column))
        if self.operator == "eq":
            return actual == self.values[0]
        if self.operator == "neq":
            return actual != self.values[0]
        return actual in self.values


@dataclass(eq=False)
class Subscription:
    table: str
    event: str = "*"
    row_filter: Optional[RowFilter] = None
    on_insert: Optional[Callback] = None
    on_update: Optional[Callback] = None
    on_delete: Optional[Callback] = None
    on_any: Optional[Callback] = None
    _feed: Optional["ChangeFeed"] = field(default=None, repr=False)

    def matches(self, event: ChangeEvent) -> bool:
        if event.table != self.table:
            return False
        if self.event != "*" and self.event != event.event_type:
            return False
        return self.row_filter is None or self.row_filter.matches(event.row)

    async def dispatch(self, event: ChangeEvent):
        specific = {
            "INSERT": self.on_insert,
            "UPDATE": self.on_update,
            "DELETE": self.on_delete,
        }[event.event_type]
        for callback in (specific, self.on_any):
            if callback is None:
                continue
            result = callback(event)
            if inspect.isawaitable(result):
                await result

    @property
    def active(self) -> bool:
        return self._feed is not None

    def unsubscribe(self):
        if self._feed is not None:
            self._feed.remove(self)
            self._feed = None


class ChangeFeed:
    """
    In-process fan-out of row changes to subscribers.

    Subscribers register per table with an optional event type and row filter,
    mirroring the realtime channels the booking UI listens on. A failing
    callback is logged and does not stop delivery to the others.
    """

    def __init__(self):
        self._subscriptions: List[Subscription] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(
        self,
        table: str,
        event: str = "*",
        filter: Optional[str] = None,
        on_insert: Optional[Callback] = None,
        on_update: Optional[Callback] = None,
        on_delete: Optional[Callback] = None,
        on_any: Optional[Callback] = None,
    ) -> Subscription:
        subscription = Subscription(
            table=table,
            event=event,
            row_filter=RowFilter.parse(filter) if filter else None,
            on_insert=on_insert,
            on_update=on_update,
            on_delete=on_delete,
            on_any=on_any,
            _feed=self,
        )
        self._subscriptions.append(subscription)
        return subscription

    def remove(self, subscription: Subscription):
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    async def publish(self, event: ChangeEvent):
        for subscription in list(self._subscriptions):
            if not subscription.matches(event):
                continue
            try:
                await subscription.dispatch(event)
            except Exception as e:
                logger.error(f"Realtime subscriber error [{event.table}]: {e}")

    def listen(self, table: str, event: str = "*", filter: Optional[str] = None) -> "ChangeStream":
        """Subscribes immediately and returns an async iterator over matching events."""
        return ChangeStream(self, table, event, filter)


class ChangeStream:
    """
    Queue-backed async iterator over a feed subscription.

    Must be created inside a running event loop. Events published from other
    threads or loops are handed over with `call_soon_threadsafe`.
    """

    def __init__(self, feed: ChangeFeed, table: str, event: str = "*", filter: Optional[str] = None):
        self._loop = asyncio.get_running_loop()
        self._queue: asyncio.Queue = asyncio.Queue()
        self._subscription = feed.subscribe(table, event, filter, on_any=self._enqueue)

    def _enqueue(self, event: ChangeEvent):
        self._loop.call_soon_threadsafe(self._queue.put_nowait, event)

    def __aiter__(self) -> AsyncIterator[ChangeEvent]:
        return self

    async def __anext__(self) -> ChangeEvent:
        if not self._subscription.active:
            raise StopAsyncIteration
        return await self._queue.get()

    def close(self):
        self._subscription.unsubscribe()
