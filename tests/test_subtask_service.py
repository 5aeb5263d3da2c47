"""Service-level tests for subtasks and progress."""

import pytest
from sqlalchemy import func, select

from app.errors import (
    InvalidAssignee,
    InvalidTaskId,
    NoFieldsProvided,
    SubtaskNotFound,
    TaskNotFound,
    ValidationError,
)
from app.models import Subtask
from app.schemas.subtask import SubtaskCreate, SubtaskFilters
from app.schemas.task import TaskCreate
from app.services.subtask_service import SubtaskService
from app.services.task_service import TaskService
from tests.conftest import ALICE_ID, BOB_ID, CAROL_ID


async def _task(db, title="Sports day", **kwargs):
    return await TaskService(db).create(TaskCreate(title=title, **kwargs), created_by=ALICE_ID)


@pytest.mark.db
@pytest.mark.asyncio
async def test_create_subtask(db_session):
    task = await _task(db_session)
    subtask = await SubtaskService(db_session).create(
        SubtaskCreate(
            relation_task_id=task.task_id,
            subtask_title="  Mark the track ",
            assigned_to=BOB_ID,
            subtask_date="2024-06-10",
        )
    )

    assert subtask.subtask_title == "Mark the track"
    assert subtask.subtask_status == "todo"
    assert subtask.relation_task_id == task.task_id
    assert subtask.assigned_user_name == "Bob Tutor"
    assert subtask.task_title == "Sports day"
    assert subtask.task_created_by_name == "Alice Admin"
    assert subtask.subtask_date.isoformat() == "2024-06-10"


@pytest.mark.db
@pytest.mark.asyncio
async def test_create_under_missing_task(db_session):
    with pytest.raises(InvalidTaskId) as exc:
        await SubtaskService(db_session).create(SubtaskCreate(relation_task_id=42, subtask_title="Orphan"))
    assert exc.value.message == "Parent task not found"
    assert (await db_session.execute(select(func.count()).select_from(Subtask))).scalar_one() == 0


@pytest.mark.db
@pytest.mark.asyncio
async def test_create_rejects_impossible_date(db_session):
    task = await _task(db_session)
    with pytest.raises(ValidationError) as exc:
        await SubtaskService(db_session).create(
            SubtaskCreate(relation_task_id=task.task_id, subtask_title="Leap", subtask_date="2024-02-30")
        )
    assert exc.value.errors[0].field == "subtask_date"


@pytest.mark.db
@pytest.mark.asyncio
async def test_create_rejects_inactive_assignee(db_session):
    task = await _task(db_session)
    with pytest.raises(InvalidAssignee):
        await SubtaskService(db_session).create(
            SubtaskCreate(relation_task_id=task.task_id, subtask_title="Chairs", assigned_to=CAROL_ID)
        )


@pytest.mark.db
@pytest.mark.asyncio
async def test_update_subtask(db_session):
    task = await _task(db_session)
    service = SubtaskService(db_session)
    subtask = await service.create(SubtaskCreate(relation_task_id=task.task_id, subtask_title="Whistles"))

    updated = await service.update(subtask.subtask_id, {"subtask_status": "done", "subtask_comment": " bought "})
    assert updated.subtask_status == "done"
    assert updated.subtask_comment == "bought"

    back = await service.update(subtask.subtask_id, {"subtask_status": "todo"})
    assert back.subtask_status == "todo"

    with pytest.raises(NoFieldsProvided):
        await service.update(subtask.subtask_id, {})
    with pytest.raises(SubtaskNotFound):
        await service.update(9999, {"subtask_status": "done"})


@pytest.mark.db
@pytest.mark.asyncio
async def test_parent_cannot_change(db_session):
    first = await _task(db_session, title="First task")
    second = await _task(db_session, title="Second task")
    service = SubtaskService(db_session)
    subtask = await service.create(SubtaskCreate(relation_task_id=first.task_id, subtask_title="Stay put"))

    updated = await service.update(
        subtask.subtask_id,
        {"relation_task_id": second.task_id, "subtask_title": "Still here"},
    )
    assert updated.relation_task_id == first.task_id
    assert updated.subtask_title == "Still here"


@pytest.mark.db
@pytest.mark.asyncio
async def test_list_by_task(db_session):
    task = await _task(db_session)
    other = await _task(db_session, title="Other task")
    service = SubtaskService(db_session)
    await service.create(SubtaskCreate(relation_task_id=task.task_id, subtask_title="Older"))
    await service.create(SubtaskCreate(relation_task_id=task.task_id, subtask_title="Newer"))
    await service.create(SubtaskCreate(relation_task_id=other.task_id, subtask_title="Elsewhere"))

    subtasks, info = await service.list_by_task(task.task_id)
    assert [s.subtask_title for s in subtasks] == ["Newer", "Older"]
    assert info.title == "Sports day"
    assert info.created_by_name == "Alice Admin"

    subtasks, info = await service.list_by_task((await _task(db_session, title="Empty task")).task_id)
    assert subtasks == []

    with pytest.raises(TaskNotFound):
        await service.list_by_task(777)


@pytest.mark.db
@pytest.mark.asyncio
async def test_filtered_list(db_session):
    task = await _task(db_session)
    service = SubtaskService(db_session)
    await service.create(SubtaskCreate(relation_task_id=task.task_id, subtask_title="Buy medals", assigned_to=BOB_ID))
    await service.create(SubtaskCreate(relation_task_id=task.task_id, subtask_title="Print programme"))

    subtasks, pagination = await service.list(SubtaskFilters(assigned_to=BOB_ID))
    assert [s.subtask_title for s in subtasks] == ["Buy medals"]
    assert pagination.total == 1

    subtasks, _ = await service.list(SubtaskFilters(search="programme"))
    assert [s.subtask_title for s in subtasks] == ["Print programme"]


@pytest.mark.db
@pytest.mark.asyncio
async def test_progress_summary(db_session):
    service = SubtaskService(db_session)
    report = await _task(
        db_session,
        title="Term report",
        subtasks=[{"subtask_title": "A"}, {"subtask_title": "B"}, {"subtask_title": "C"}],
    )
    await _task(db_session, title="No subtasks")
    await service.update(report.subtasks[0].subtask_id, {"subtask_status": "done"})

    progress = await service.progress_summary()
    assert len(progress) == 1
    item = progress[0]
    assert item.task_id == report.task_id
    assert (item.total_subtasks, item.completed_subtasks, item.todo_subtasks) == (3, 1, 2)
    assert item.completion_percentage == 33.33

    task = await TaskService(db_session).get_by_id(report.task_id)
    assert (task.subtasks_count, task.completed_subtasks) == (3, 1)


@pytest.mark.db
@pytest.mark.asyncio
async def test_list_by_status_and_delete(db_session):
    task = await _task(db_session, subtasks=[{"subtask_title": "One"}, {"subtask_title": "Two"}])
    service = SubtaskService(db_session)
    first = task.subtasks[0]
    await service.update(first.subtask_id, {"subtask_status": "in_progress"})

    board = await service.list_by_status()
    assert [s.subtask_title for s in board.in_progress] == ["One"]
    assert [s.subtask_title for s in board.todo] == ["Two"]

    await service.delete(first.subtask_id)
    with pytest.raises(SubtaskNotFound):
        await service.get_by_id(first.subtask_id)
    with pytest.raises(SubtaskNotFound):
        await service.delete(first.subtask_id)

    remaining, _ = await service.list_by_task(task.task_id)
    assert [s.subtask_title for s in remaining] == ["Two"]
