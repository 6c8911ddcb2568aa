"""Tests for the SQLAlchemy task repository."""

from datetime import datetime, timedelta

import pytest

from taskboard.models import Task, TaskPriority, TaskStatus
from taskboard.repositories import TaskFilter, TaskSort
from taskboard.schemas import TaskCreate

FUTURE = datetime(2099, 1, 1)


def make(repository, title="Task", assigned_user="alice", **fields) -> Task:
    draft = TaskCreate.model_validate(
        {"title": title, "assigned_user": assigned_user, **fields},
        context={"check_due_date": False},
    )
    return repository.create(draft)


def titles(tasks) -> list:
    return [task.title for task in tasks]


def test_create_assigns_id_and_timestamps(repository) -> None:
    task = make(repository, "Write docs", description="Details")
    assert task.id is not None
    assert task.created_at is not None
    assert task.updated_at == task.created_at

    stored = repository.find_by_id(task.id)
    assert stored.title == "Write docs"
    assert stored.description == "Details"
    assert stored.status == TaskStatus.TODO
    assert stored.priority == TaskPriority.MEDIUM


def test_find_by_id_missing_returns_none(repository) -> None:
    from uuid import uuid4

    assert repository.find_by_id(uuid4()) is None


def test_find_many_filters_are_anded(repository) -> None:
    make(repository, "A", "alice", status=TaskStatus.DONE, priority=TaskPriority.HIGH)
    make(repository, "B", "alice", status=TaskStatus.DONE, priority=TaskPriority.LOW)
    make(repository, "C", "bob", status=TaskStatus.DONE, priority=TaskPriority.HIGH)
    make(repository, "D", "alice", status=TaskStatus.TODO, priority=TaskPriority.HIGH)

    tasks, total = repository.find_many(
        TaskFilter(status=TaskStatus.DONE, priority=TaskPriority.HIGH, assigned_user="ali"),
        TaskSort("title", "asc"),
        skip=0,
        limit=10,
    )
    assert titles(tasks) == ["A"]
    assert total == 1

    # No filter on a dimension never excludes records on it
    tasks, total = repository.find_many(TaskFilter(), TaskSort("title", "asc"), skip=0, limit=10)
    assert titles(tasks) == ["A", "B", "C", "D"]
    assert total == 4


def test_assigned_user_and_search_are_case_insensitive_substrings(repository) -> None:
    make(repository, "Fix LOGIN page", "Alice.Smith")
    make(repository, "Docs", "bob", description="Explain the login flow")
    make(repository, "Other", "carol")

    tasks, _ = repository.find_many(TaskFilter(assigned_user="SMITH"), TaskSort(), 0, 10)
    assert titles(tasks) == ["Fix LOGIN page"]

    tasks, _ = repository.find_many(TaskFilter(search="login"), TaskSort("title", "asc"), 0, 10)
    assert titles(tasks) == ["Docs", "Fix LOGIN page"]


def test_search_treats_wildcards_literally(repository) -> None:
    make(repository, "100% done")
    make(repository, "1000 done")

    tasks, total = repository.find_many(TaskFilter(search="0%"), TaskSort(), 0, 10)
    assert titles(tasks) == ["100% done"]
    assert total == 1

    tasks, total = repository.find_many(TaskFilter(search="_"), TaskSort(), 0, 10)
    assert total == 0


def test_due_date_range_is_inclusive(repository) -> None:
    make(repository, "Jan", due_date=datetime(2099, 1, 1))
    make(repository, "Feb", due_date=datetime(2099, 2, 1))
    make(repository, "Mar", due_date=datetime(2099, 3, 1))
    make(repository, "None")

    tasks, total = repository.find_many(
        TaskFilter(due_date_from=datetime(2099, 1, 1), due_date_to=datetime(2099, 2, 1)),
        TaskSort("dueDate", "asc"),
        0,
        10,
    )
    assert titles(tasks) == ["Jan", "Feb"]
    assert total == 2


def test_sort_ties_broken_by_id_ascending(repository, db) -> None:
    tasks = [make(repository, "Same") for _ in range(5)]
    stamp = datetime(2030, 1, 1)
    for task in tasks:
        task.created_at = stamp
    db.commit()

    expected = sorted(str(task.id) for task in tasks)
    for order in ("asc", "desc"):
        page, _ = repository.find_many(TaskFilter(), TaskSort("createdAt", order), 0, 10)
        assert [str(task.id) for task in page] == expected
        page, _ = repository.find_many(TaskFilter(), TaskSort("title", order), 0, 10)
        assert [str(task.id) for task in page] == expected


def test_tasks_without_due_date_sort_last(repository) -> None:
    make(repository, "none")
    make(repository, "late", due_date=datetime(2099, 6, 1))
    make(repository, "early", due_date=datetime(2099, 1, 1))

    tasks, _ = repository.find_many(TaskFilter(), TaskSort("dueDate", "asc"), 0, 10)
    assert titles(tasks) == ["early", "late", "none"]

    tasks, _ = repository.find_many(TaskFilter(), TaskSort("dueDate", "desc"), 0, 10)
    assert titles(tasks) == ["late", "early", "none"]


def test_skip_and_limit_with_total(repository) -> None:
    for i in range(7):
        make(repository, f"T{i}")

    tasks, total = repository.find_many(TaskFilter(), TaskSort("title", "asc"), skip=5, limit=5)
    assert titles(tasks) == ["T5", "T6"]
    assert total == 7

    tasks, total = repository.find_many(TaskFilter(), TaskSort("title", "asc"), skip=10, limit=5)
    assert tasks == []
    assert total == 7


def test_update_changes_only_given_fields(repository) -> None:
    task = make(repository, "Keep", description="Desc", due_date=FUTURE)
    before = task.updated_at

    updated = repository.update_by_id(task.id, {"status": TaskStatus.IN_REVIEW})
    assert updated.status == TaskStatus.IN_REVIEW
    assert updated.title == "Keep"
    assert updated.description == "Desc"
    assert updated.due_date == FUTURE
    assert updated.updated_at > before


def test_updated_at_strictly_increases_on_consecutive_updates(repository) -> None:
    task = make(repository)
    stamps = [task.updated_at]
    for status in (TaskStatus.IN_PROGRESS, TaskStatus.IN_REVIEW, TaskStatus.DONE):
        stamps.append(repository.update_by_id(task.id, {"status": status}).updated_at)
    assert stamps == sorted(set(stamps))
    assert task.created_at <= stamps[-1]


def test_update_rejects_unknown_fields(repository) -> None:
    task = make(repository)
    with pytest.raises(ValueError):
        repository.update_by_id(task.id, {"created_at": datetime(2000, 1, 1)})


def test_update_and_delete_missing(repository) -> None:
    from uuid import uuid4

    assert repository.update_by_id(uuid4(), {"title": "x"}) is None
    assert repository.delete_by_id(uuid4()) is False


def test_delete_is_hard_delete(repository) -> None:
    task = make(repository)
    assert repository.delete_by_id(task.id) is True
    assert repository.find_by_id(task.id) is None
    assert repository.delete_by_id(task.id) is False


def test_count_by_group_and_count_where(repository) -> None:
    make(repository, status=TaskStatus.TODO)
    make(repository, status=TaskStatus.TODO)
    make(repository, status=TaskStatus.DONE, due_date=datetime(2000, 1, 1))
    make(repository, status=TaskStatus.IN_PROGRESS, due_date=datetime(2000, 1, 1))

    assert repository.count_by_group("status") == {"todo": 2, "done": 1, "in-progress": 1}
    assert repository.count_where(TaskFilter()) == 4
    assert repository.count_where(
        TaskFilter(due_before=datetime(2020, 1, 1), status_not=TaskStatus.DONE)
    ) == 1


def test_count_by_group_rejects_unknown_field(repository) -> None:
    with pytest.raises(ValueError):
        repository.count_by_group("title")


def test_sort_rejects_unknown_field() -> None:
    with pytest.raises(ValueError):
        TaskSort("priority", "asc")
