"""
Subtask status aggregation.

One pure implementation used by every listing path: task reads (subtask
counts), both Kanban boards and the per-task progress summary.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, Dict, Iterable, List, Sequence, TypeVar

from app.models.base_model import WORK_STATUSES

T = TypeVar("T")


@dataclass(frozen=True)
class StatusCounts:
    todo: int = 0
    in_progress: int = 0
    done: int = 0

    @property
    def total(self) -> int:
        return self.todo + self.in_progress + self.done


def summarize_statuses(statuses: Iterable[str]) -> StatusCounts:
    """Count statuses. Unknown values are not counted."""
    counts = dict.fromkeys(WORK_STATUSES, 0)
    for status in statuses:
        if status in counts:
            counts[status] += 1
    return StatusCounts(**counts)


def completion_percentage(done: int, total: int) -> float:
    """done / total * 100, rounded half-up to 2 decimals. `total` must be > 0."""
    if total <= 0:
        raise ValueError("completion percentage needs at least one subtask")
    ratio = Decimal(done) * 100 / Decimal(total)
    return float(ratio.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def bucket_by_status(items: Iterable[T], status_of: Callable[[T], str]) -> Dict[str, List[T]]:
    """Group items into the three board columns, keeping input order."""
    buckets: Dict[str, List[T]] = {status: [] for status in WORK_STATUSES}
    for item in items:
        status = status_of(item)
        if status in buckets:
            buckets[status].append(item)
    return buckets


def build_progress_summary(rows: Sequence[Any]) -> List[Dict[str, Any]]:
    """
    Per-task completion from (task_id, task_title, task_created_at,
    subtask_status) rows, one row per subtask.

    Tasks only appear if they have at least one row, so a zero-subtask task
    is never reported. Ordered by completion percentage descending, then
    task creation time descending, then task id descending.
    """
    grouped: Dict[int, Dict[str, Any]] = {}
    for task_id, title, created_at, status in rows:
        entry = grouped.setdefault(
            task_id,
            {"task_id": task_id, "task_title": title, "created_at": created_at, "statuses": []},
        )
        entry["statuses"].append(status)

    summary = []
    for entry in grouped.values():
        counts = summarize_statuses(entry["statuses"])
        summary.append(
            {
                "task_id": entry["task_id"],
                "task_title": entry["task_title"],
                "created_at": entry["created_at"],
                "total_subtasks": counts.total,
                "completed_subtasks": counts.done,
                "in_progress_subtasks": counts.in_progress,
                "todo_subtasks": counts.todo,
                "completion_percentage": completion_percentage(counts.done, counts.total),
            }
        )

    summary.sort(
        key=lambda item: (item["completion_percentage"], item["created_at"], item["task_id"]),
        reverse=True,
    )
    for item in summary:
        del item["created_at"]
    return summary
