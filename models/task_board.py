# In-memory task board per stylist: load, optimistic toggle, rollback
import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass, replace
from typing import Optional

from models.errors import ErrorKind, SalonApiError
from models.tasks import get_today_tasks, group_tasks, set_task_completion, utc_timestamp

logger = logging.getLogger(__name__)


@dataclass
class ToggleResult:
    saved: bool
    completed_at: Optional[str] = None


class TaskBoard:
    """
    Today's tasks for one stylist, as shown on the stylist page.

    Loads and toggles may overlap. State changes happen under one lock;
    backend calls run outside it so a slow toggle never blocks another row.
    """

    def __init__(self, client, stylist_id, tz=None):
        self.client = client
        self.stylist_id = stylist_id
        self.tz = tz
        self.assignment_id = None
        self.tasks = []
        self.pending_ids = set()
        self.message = ''
        self.is_loading = False
        self.loaded = False
        self._generation = 0
        self._lock = threading.Lock()

    def supersede(self):
        """Drop whatever load is in flight; its result will be ignored."""
        with self._lock:
            self._generation += 1
            self.is_loading = False

    def load(self, assignment_date=None):
        with self._lock:
            self._generation += 1
            generation = self._generation
            self.is_loading = True
            self.message = ''

        try:
            result = get_today_tasks(self.client, self.stylist_id, assignment_date, tz=self.tz)
        except SalonApiError as e:
            with self._lock:
                if generation != self._generation:
                    return False
                self.message = str(e) or 'Failed to load your tasks'
                self.is_loading = False
            return False

        with self._lock:
            if generation != self._generation:
                logger.info('Discarding superseded load for stylist=%s', self.stylist_id)
                return False
            self.assignment_id = result.assignment_id
            self.tasks = result.tasks
            self.is_loading = False
            self.loaded = True
        return True

    def toggle(self, completion_id, completed):
        """
        Optimistically set one task's completion, then persist it.

        Only the toggled row is rolled back when the backend rejects the
        update. The result carries the value the backend now holds for a
        saved change, or the restored value when it failed.
        """
        with self._lock:
            if completion_id in self.pending_ids:
                raise SalonApiError(ErrorKind.CONFLICT, 'This task is already being saved')
            task = self._find(completion_id)
            prior = task.completed_at if task else None
            next_completed_at = utc_timestamp() if completed else None
            self.message = ''
            self.pending_ids.add(completion_id)
            if task:
                task.completed_at = next_completed_at

        try:
            saved_at = set_task_completion(self.client, completion_id, completed, completed_at=next_completed_at)
        except SalonApiError as e:
            logger.warning('Toggle failed for completion=%s: %s', completion_id, e)
            with self._lock:
                if task and task.completed_at == next_completed_at:
                    task.completed_at = prior
                self.message = str(e) or 'Failed to save task status'
            return ToggleResult(saved=False, completed_at=prior)
        finally:
            with self._lock:
                self.pending_ids.discard(completion_id)

        return ToggleResult(saved=True, completed_at=saved_at)

    def task(self, completion_id):
        with self._lock:
            task = self._find(completion_id)
            return replace(task) if task else None

    def is_pending(self, completion_id):
        with self._lock:
            return completion_id in self.pending_ids

    def snapshot(self):
        with self._lock:
            return [replace(task) for task in self.tasks]

    def grouped(self):
        return group_tasks(self.snapshot())

    def _find(self, completion_id):
        for task in self.tasks:
            if task.completion_id == completion_id:
                return task
        return None


class TaskBoardRegistry:
    """
    Boards of the stylists currently using this process.

    Holds at most max_boards; the least recently used board is dropped
    first, so abandoned sessions do not pile up.
    """

    def __init__(self, client, tz=None, max_boards=200):
        self.client = client
        self.tz = tz
        self.max_boards = max(1, max_boards)
        self._boards = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self):
        with self._lock:
            return len(self._boards)

    def get(self, stylist_id):
        evicted = []
        with self._lock:
            board = self._boards.get(stylist_id)
            if board is None:
                board = TaskBoard(self.client, stylist_id, tz=self.tz)
                self._boards[stylist_id] = board
            self._boards.move_to_end(stylist_id)
            while len(self._boards) > self.max_boards:
                evicted.append(self._boards.popitem(last=False)[1])
        for old in evicted:
            logger.info('Dropping idle task board for stylist=%s', old.stylist_id)
            old.supersede()
        return board

    def discard(self, stylist_id):
        with self._lock:
            board = self._boards.pop(stylist_id, None)
        if board is not None:
            board.supersede()
        return board
