"""
Live task feed - pushes the visibility-filtered task list to subscribers.

Every subscriber sees what ``get_visible_tasks`` would return for its
caller, kept current as tasks are created, changed and deleted through
an ObservedTaskStore. Only writes made by this process are observed.
"""
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Set
import asyncio
import logging
import threading

from api.services.tasks.models import Task
from api.services.tasks.permissions import is_visible_to
from api.services.tasks.store import TaskStore

logger = logging.getLogger(__name__)

ADDED = "added"
CHANGED = "changed"
REMOVED = "removed"


@dataclass(frozen=True)
class TaskEvent:
    type: str
    task_id: str
    task: Optional[Task] = None

    def payload(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.task_id}
        if self.task is not None:
            data["task"] = self.task.model_dump(mode="json")
        return data


class Subscription:
    """One subscriber's view: its initial snapshot and a queue of changes."""

    def __init__(self, caller_id: Optional[str], initial: List[Task], loop: asyncio.AbstractEventLoop):
        self.caller_id = caller_id
        self.initial = initial
        self.queue: "asyncio.Queue[TaskEvent]" = asyncio.Queue()
        self._visible: Set[str] = {task.id for task in initial}
        self._loop = loop

    def _deliver(self, task_id: str, current: Optional[Task]) -> None:
        was_visible = task_id in self._visible
        now_visible = current is not None and is_visible_to(current, self.caller_id)

        if now_visible and not was_visible:
            self._visible.add(task_id)
            event = TaskEvent(ADDED, task_id, current)
        elif now_visible:
            event = TaskEvent(CHANGED, task_id, current)
        elif was_visible:
            self._visible.discard(task_id)
            event = TaskEvent(REMOVED, task_id)
        else:
            return

        self._loop.call_soon_threadsafe(self.queue.put_nowait, event)

    async def next_event(self, timeout: Optional[float] = None) -> Optional[TaskEvent]:
        """Wait for the next change; None if nothing arrived within timeout."""
        try:
            return await asyncio.wait_for(self.queue.get(), timeout)
        except asyncio.TimeoutError:
            return None


class TaskFeed:
    def __init__(self):
        self._subscriptions: Set[Subscription] = set()
        self._lock = threading.Lock()

    def subscribe(self, store: TaskStore, caller_id: Optional[str]) -> Subscription:
        """Snapshot the caller's visible tasks and start receiving changes.

        Must be called from the event loop that will consume the events.
        """
        loop = asyncio.get_running_loop()
        with self._lock:
            subscription = Subscription(caller_id, list(store.find_visible(caller_id)), loop)
            self._subscriptions.add(subscription)
        logger.info(f"📡 Subscribed {caller_id} ({len(subscription.initial)} tasks)")
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        with self._lock:
            self._subscriptions.discard(subscription)
        logger.info(f"📴 Unsubscribed {subscription.caller_id}")

    def publish(self, task_id: str, current: Optional[Task]) -> None:
        """Announce the new state of a task; None means it was deleted."""
        with self._lock:
            for subscription in list(self._subscriptions):
                try:
                    subscription._deliver(task_id, current)
                except RuntimeError as e:
                    # Subscriber's event loop is gone
                    logger.warning(f"Dropping subscription of {subscription.caller_id}: {e}")
                    self._subscriptions.discard(subscription)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)


class ObservedTaskStore:
    """TaskStore wrapper that publishes every successful write to a feed."""

    def __init__(self, store: TaskStore, feed: TaskFeed):
        self._store = store
        self._feed = feed

    def insert(self, fields: Dict[str, Any]) -> Task:
        task = self._store.insert(fields)
        self._feed.publish(task.id, task)
        return task

    def find_one(self, task_id: str) -> Optional[Task]:
        return self._store.find_one(task_id)

    def update(self, task_id: str, changes: Dict[str, Any]) -> int:
        updated = self._store.update(task_id, changes)
        if updated:
            self._feed.publish(task_id, self._store.find_one(task_id))
        return updated

    def remove(self, task_id: str) -> int:
        removed = self._store.remove(task_id)
        if removed:
            self._feed.publish(task_id, None)
        return removed

    def find_visible(self, caller_id: Optional[str]) -> Iterator[Task]:
        return self._store.find_visible(caller_id)
