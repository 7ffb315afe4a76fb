# Today's tasks for a stylist: assignment lookup, joined fetch, projection
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from models.errors import ErrorKind, SalonApiError

logger = logging.getLogger(__name__)

DEFAULT_SECTION = 'General'

COMPLETION_SELECT = (
    'id,completed_at,'
    'assignment_checklists!inner(assignment_id,checklists(name)),'
    'checklist_tasks(name,section,sort_order)'
)


@dataclass
class StylistTask:
    completion_id: int
    checklist_name: str
    section: str
    task_name: str
    sort_order: float
    completed_at: Optional[str] = None

    @property
    def done(self):
        return self.completed_at is not None

    def to_dict(self):
        return {
            'completion_id': self.completion_id,
            'checklist_name': self.checklist_name,
            'section': self.section,
            'task_name': self.task_name,
            'sort_order': self.sort_order,
            'completed_at': self.completed_at,
        }


@dataclass
class TodayTasks:
    assignment_id: Optional[int]
    tasks: List[StylistTask] = field(default_factory=list)


def today_iso_date(now=None, tz=None):
    """Wall-clock date in the salon's zone (server local when tz is None) as YYYY-MM-DD."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(tz).date().isoformat()


def utc_timestamp():
    return datetime.now(timezone.utc).isoformat()


def _nested(row, key):
    # many-to-one embeds come back as an object, but tolerate a one-item list
    value = row.get(key) if isinstance(row, dict) else None
    if isinstance(value, list):
        value = value[0] if value else None
    return value if isinstance(value, dict) else {}


def _to_number(value):
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            pass
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    # NaN and inf would break the total order of the sort key
    return number if math.isfinite(number) else 0


def project_task_row(row):
    """Turn one joined task_completions row into a StylistTask."""
    completion_id = row.get('id') if isinstance(row, dict) else None
    if completion_id is None:
        raise SalonApiError(ErrorKind.BACKEND_ERROR, 'Task row without a completion id')

    checklist = _nested(_nested(row, 'assignment_checklists'), 'checklists')
    task = _nested(row, 'checklist_tasks')
    section = (task.get('section') or '').strip()

    return StylistTask(
        completion_id=completion_id,
        checklist_name=checklist.get('name') or '',
        section=section or DEFAULT_SECTION,
        task_name=task.get('name') or '',
        sort_order=_to_number(task.get('sort_order')),
        completed_at=row.get('completed_at') or None,
    )


def task_sort_key(task):
    return (task.checklist_name, task.section, task.sort_order, task.task_name)


def find_assignment_id(client, stylist_id, assignment_date):
    rows = client.select('daily_assignments', [
        ('select', 'id'),
        ('stylist_id', f'eq.{stylist_id}'),
        ('assignment_date', f'eq.{assignment_date}'),
    ])
    if not rows:
        return None
    if len(rows) > 1:
        raise SalonApiError(
            ErrorKind.CONFLICT,
            f'More than one assignment for stylist {stylist_id} on {assignment_date}'
        )
    return rows[0]['id']


def get_today_tasks(client, stylist_id, assignment_date=None, tz=None):
    assignment_date = assignment_date or today_iso_date(tz=tz)

    try:
        assignment_id = find_assignment_id(client, stylist_id, assignment_date)
        if assignment_id is None:
            return TodayTasks(assignment_id=None, tasks=[])

        rows = client.select('task_completions', [
            ('select', COMPLETION_SELECT),
            ('assignment_checklists.assignment_id', f'eq.{assignment_id}'),
        ])
        tasks = sorted((project_task_row(row) for row in rows), key=task_sort_key)
    except SalonApiError as e:
        logger.warning('Loading tasks failed for stylist=%s date=%s: %s', stylist_id, assignment_date, e)
        raise SalonApiError(e.kind, f'Failed to load tasks: {e}', status_code=e.status_code) from e

    logger.info('Loaded %d tasks for stylist=%s assignment=%s', len(tasks), stylist_id, assignment_id)
    return TodayTasks(assignment_id=assignment_id, tasks=tasks)


def group_tasks(tasks):
    """checklist -> section -> [tasks], keeping the incoming order."""
    grouped = {}
    for task in tasks:
        grouped.setdefault(task.checklist_name, {}).setdefault(task.section, []).append(task)
    return grouped


def set_task_completion(client, completion_id, completed, completed_at=None):
    value = (completed_at or utc_timestamp()) if completed else None
    rows = client.update('task_completions', [('id', f'eq.{completion_id}')], {'completed_at': value})
    if not rows:
        raise SalonApiError(ErrorKind.NOT_FOUND, f'Task completion {completion_id} not found')
    return value
