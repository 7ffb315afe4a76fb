# tests/test_tasks.py

from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

import models.tasks as tasks_module
from models.errors import ErrorKind, SalonApiError
from models.tasks import (
    get_today_tasks,
    group_tasks,
    project_task_row,
    set_task_completion,
    today_iso_date,
)

from .fakes import backend_error, completion_row


def amy_rows():
    return [
        completion_row(3, 'Opening', 'Restock towels', section='Back', sort_order=1),
        completion_row(2, 'Opening', 'Wipe mirrors', section='Front', sort_order=2),
        completion_row(1, 'Opening', 'Sweep floor', section='Front', sort_order=1),
    ]


def test_no_assignment_returns_empty_result(fake_client) -> None:
    fake_client.tables['daily_assignments'] = []

    result = get_today_tasks(fake_client, 'amy', '2026-10-19')

    assert result.assignment_id is None
    assert result.tasks == []
    assert fake_client.calls_to('select', 'task_completions') == []


def test_assignment_without_tasks_is_distinguishable(fake_client) -> None:
    fake_client.tables['daily_assignments'] = [{'id': 9}]

    result = get_today_tasks(fake_client, 'amy', '2026-10-19')

    assert result.assignment_id == 9
    assert result.tasks == []


def test_lookup_filters_on_stylist_and_date(fake_client) -> None:
    fake_client.tables['daily_assignments'] = [{'id': 9}]

    get_today_tasks(fake_client, 'amy', '2026-10-19')

    params = dict(fake_client.calls_to('select', 'daily_assignments')[0][2])
    assert params['stylist_id'] == 'eq.amy'
    assert params['assignment_date'] == 'eq.2026-10-19'


def test_completions_fetched_in_one_joined_request(fake_client) -> None:
    fake_client.tables['daily_assignments'] = [{'id': 9}]
    fake_client.tables['task_completions'] = amy_rows()

    get_today_tasks(fake_client, 'amy', '2026-10-19')

    calls = fake_client.calls_to('select', 'task_completions')
    assert len(calls) == 1
    params = dict(calls[0][2])
    assert 'assignment_checklists!inner' in params['select']
    assert 'checklist_tasks' in params['select']
    assert params['assignment_checklists.assignment_id'] == 'eq.9'


def test_tasks_sorted_by_checklist_section_order_name(fake_client) -> None:
    fake_client.tables['daily_assignments'] = [{'id': 1}]
    fake_client.tables['task_completions'] = [
        completion_row(1, 'Station', 'Clean chair', section='Chair', sort_order=1),
        completion_row(2, 'Opening', 'Zap lights', section='Front', sort_order=1),
        completion_row(3, 'Opening', 'Alarm off', section='Front', sort_order=1),
        completion_row(4, 'Opening', 'Mop', section='Front', sort_order=0),
        completion_row(5, 'Opening', 'Towels', section='Back', sort_order=5),
    ]

    tasks = get_today_tasks(fake_client, 'amy', '2026-10-19').tasks

    assert [t.completion_id for t in tasks] == [5, 4, 3, 2, 1]


def test_repeated_loads_are_identical_regardless_of_row_order(fake_client) -> None:
    fake_client.tables['daily_assignments'] = [{'id': 1}]
    fake_client.tables['task_completions'] = amy_rows()
    first = get_today_tasks(fake_client, 'amy', '2026-10-19')

    fake_client.tables['task_completions'] = list(reversed(amy_rows()))
    second = get_today_tasks(fake_client, 'amy', '2026-10-19')

    assert first == second


def test_amy_tasks_group_by_section(fake_client) -> None:
    fake_client.tables['daily_assignments'] = [{'id': 1}]
    fake_client.tables['task_completions'] = amy_rows()

    grouped = group_tasks(get_today_tasks(fake_client, 'amy', '2026-10-19').tasks)

    assert list(grouped) == ['Opening']
    sections = grouped['Opening']
    assert list(sections) == ['Back', 'Front']
    assert [t.task_name for t in sections['Front']] == ['Sweep floor', 'Wipe mirrors']
    assert [t.task_name for t in sections['Back']] == ['Restock towels']


def test_more_than_one_assignment_is_a_conflict(fake_client) -> None:
    fake_client.tables['daily_assignments'] = [{'id': 1}, {'id': 2}]

    with pytest.raises(SalonApiError) as exc_info:
        get_today_tasks(fake_client, 'amy', '2026-10-19')

    assert exc_info.value.kind == ErrorKind.CONFLICT
    assert str(exc_info.value).startswith('Failed to load tasks')


@pytest.mark.parametrize('table', ['daily_assignments', 'task_completions'])
def test_any_fetch_failure_aborts_with_single_error(fake_client, table) -> None:
    fake_client.tables['daily_assignments'] = [{'id': 1}]
    fake_client.tables['task_completions'] = amy_rows()
    fake_client.select_errors[table] = backend_error('db down')

    with pytest.raises(SalonApiError) as exc_info:
        get_today_tasks(fake_client, 'amy', '2026-10-19')

    assert str(exc_info.value) == 'Failed to load tasks: db down'
    assert exc_info.value.kind == ErrorKind.BACKEND_ERROR


def test_blank_or_missing_section_becomes_general() -> None:
    blank = project_task_row(completion_row(1, 'Opening', 'Sweep', section='  '))
    missing = project_task_row({
        'id': 2,
        'completed_at': None,
        'assignment_checklists': {'checklists': {'name': 'Opening'}},
        'checklist_tasks': {'name': 'Mop'},
    })

    assert blank.section == 'General'
    assert missing.section == 'General'
    assert missing.sort_order == 0


def test_projection_coerces_sort_order_and_defaults_missing_nesting() -> None:
    task = project_task_row({'id': 4, 'checklist_tasks': [{'name': 'Fold', 'sort_order': '7'}]})

    assert task.sort_order == 7
    assert task.task_name == 'Fold'
    assert task.checklist_name == ''
    assert task.completed_at is None


def test_projection_rejects_row_without_id() -> None:
    with pytest.raises(SalonApiError):
        project_task_row({'completed_at': None})


def test_today_iso_date_uses_salon_wall_clock_day() -> None:
    # 20:30 on the 19th in Los Angeles is already the 20th in UTC
    now = datetime(2026, 10, 20, 3, 30, tzinfo=timezone.utc)

    assert today_iso_date(now, tz=ZoneInfo('America/Los_Angeles')) == '2026-10-19'
    assert today_iso_date(now, tz=timezone.utc) == '2026-10-20'


def test_today_iso_date_ahead_of_utc() -> None:
    now = datetime(2026, 10, 19, 16, 0, tzinfo=timezone.utc)

    assert today_iso_date(now, tz=ZoneInfo('Asia/Tokyo')) == '2026-10-20'


def test_get_today_tasks_defaults_to_salon_day(fake_client, monkeypatch) -> None:
    monkeypatch.setattr(tasks_module, 'today_iso_date', lambda now=None, tz=None: f'day-in-{tz}')
    fake_client.tables['daily_assignments'] = []
    zone = ZoneInfo('America/Los_Angeles')

    get_today_tasks(fake_client, 'amy', tz=zone)

    params = dict(fake_client.calls_to('select', 'daily_assignments')[0][2])
    assert params['assignment_date'] == f'eq.day-in-{zone}'


@pytest.mark.parametrize('bad_value', ['NaN', 'inf', '-Infinity', float('nan')])
def test_non_finite_sort_order_becomes_zero(bad_value) -> None:
    task = project_task_row(completion_row(1, 'Opening', 'Sweep', sort_order=bad_value))

    assert task.sort_order == 0


def test_non_finite_sort_order_keeps_order_stable(fake_client) -> None:
    rows = [
        completion_row(1, 'Opening', 'Sweep floor', section='Front', sort_order='NaN'),
        completion_row(2, 'Opening', 'Wipe mirrors', section='Front', sort_order=2),
        completion_row(3, 'Opening', 'Unlock doors', section='Front', sort_order=1),
    ]
    fake_client.tables['daily_assignments'] = [{'id': 1}]

    fake_client.tables['task_completions'] = rows
    forward = [t.completion_id for t in get_today_tasks(fake_client, 'amy', '2026-10-19').tasks]
    fake_client.tables['task_completions'] = list(reversed(rows))
    backward = [t.completion_id for t in get_today_tasks(fake_client, 'amy', '2026-10-19').tasks]

    assert forward == backward == [1, 3, 2]


def test_fractional_sort_order_is_kept() -> None:
    task = project_task_row(completion_row(1, 'Opening', 'Sweep', sort_order='1.5'))

    assert task.sort_order == 1.5


def test_set_completion_true_uses_given_timestamp(fake_client) -> None:
    fake_client.tables['task_completions'] = [completion_row(1, 'Opening', 'Sweep')]

    value = set_task_completion(fake_client, 1, True, completed_at='2026-10-19T09:00:00+00:00')

    assert value == '2026-10-19T09:00:00+00:00'
    assert fake_client.tables['task_completions'][0]['completed_at'] == value


def test_set_completion_false_clears_timestamp(fake_client) -> None:
    fake_client.tables['task_completions'] = [
        completion_row(1, 'Opening', 'Sweep', completed_at='2026-10-19T09:00:00+00:00')
    ]

    assert set_task_completion(fake_client, 1, False) is None
    assert fake_client.tables['task_completions'][0]['completed_at'] is None


def test_set_completion_unknown_id_is_not_found(fake_client) -> None:
    fake_client.tables['task_completions'] = []

    with pytest.raises(SalonApiError) as exc_info:
        set_task_completion(fake_client, 99, True)

    assert exc_info.value.kind == ErrorKind.NOT_FOUND


def test_reload_reflects_persisted_completion(fake_client) -> None:
    fake_client.tables['daily_assignments'] = [{'id': 1}]
    fake_client.tables['task_completions'] = amy_rows()

    set_task_completion(fake_client, 2, True, completed_at='2026-10-19T09:00:00+00:00')
    tasks = {t.completion_id: t for t in get_today_tasks(fake_client, 'amy', '2026-10-19').tasks}

    assert tasks[2].completed_at == '2026-10-19T09:00:00+00:00'
    assert tasks[1].completed_at is None
