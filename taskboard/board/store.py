"""
Client-side board state for one project.

The store holds every task of the current project keyed by id, plus one
ordered list of ids per status column. Each task id is in exactly one column
list, the one matching its status. Column order is client-side only: the
server has no order field, so reorders are never sent and a ``load`` resets
order to whatever the server lists.

Server calls that change a task (edit, delete, cross-column move) run one at
a time per task id. Delete and cross-column move are applied locally first
and rolled back if the call fails. Create and edit wait for the server and
merge its response.
"""
import asyncio
from contextlib import asynccontextmanager
from typing import Callable

from taskboard.board.client import ApiClient, ApiRequestError
from taskboard.board.targets import ColumnTarget, DropTarget, TaskTarget
from taskboard.models.task import TaskStatus
from taskboard.schemas.task import Task, TaskCreate, TaskUpdate

Notifier = Callable[[str], None]

# (task as it was, its column, its index in that column)
Snapshot = tuple[Task, TaskStatus, int]


def print_notice(message: str) -> None:
    print(f"[BOARD] {message}")


class BoardStore:
    def __init__(self, client: ApiClient, notify: Notifier | None = None):
        self._client = client
        self._notify = notify or print_notice
        self.project_id: str | None = None
        self._tasks: dict[str, Task] = {}
        self._columns: dict[TaskStatus, list[str]] = {status: [] for status in TaskStatus}
        # Held only while some call for the task is running or queued
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_users: dict[str, int] = {}

    # ── Read side ───────────────────────────────────────

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: str) -> bool:
        return task_id in self._tasks

    def get(self, task_id: str) -> Task | None:
        task = self._tasks.get(task_id)
        return task.model_copy() if task else None

    def task_ids(self, status: TaskStatus) -> list[str]:
        return list(self._columns[status])

    def column(self, status: TaskStatus) -> list[Task]:
        return [self._tasks[task_id].model_copy() for task_id in self._columns[status]]

    def columns(self) -> dict[TaskStatus, list[Task]]:
        return {status: self.column(status) for status in TaskStatus}

    # ── Reconciliation ──────────────────────────────────

    async def load(self, project_id: str) -> None:
        """Replace the whole board with the server's task list for ``project_id``."""
        try:
            tasks = await self._client.list_tasks(project_id)
        except ApiRequestError as e:
            self._fail(e, "Failed to load tasks")
            raise

        self.project_id = project_id
        self._tasks = {}
        self._columns = {status: [] for status in TaskStatus}
        for task in tasks:
            self._place(task, None)

    async def refresh(self) -> None:
        """Invalidate local state and reload the current project."""
        if self.project_id is None:
            raise RuntimeError("No project loaded")
        await self.load(self.project_id)

    # ── Mutations ───────────────────────────────────────

    async def create_task(self, draft: TaskCreate) -> Task:
        if self.project_id is None:
            raise RuntimeError("No project loaded")
        # No optimistic insert: the id only exists once the server assigns it
        try:
            task = await self._client.create_task(self.project_id, draft)
        except ApiRequestError as e:
            self._fail(e, "Failed to create task")
            raise
        self._merge(task)
        return task.model_copy()

    async def edit_task(self, task_id: str, patch: TaskUpdate) -> Task:
        async with self._task_lock(task_id):
            try:
                task = await self._client.update_task(task_id, patch)
            except ApiRequestError as e:
                self._fail(e, "Failed to update task")
                raise
            self._merge(task)
        return task.model_copy()

    async def delete_task(self, task_id: str) -> None:
        async with self._task_lock(task_id):
            snapshot = self._detach(task_id)
            try:
                await self._client.delete_task(task_id)
            except ApiRequestError as e:
                # A load while the call was in flight may already have brought it back
                if snapshot and snapshot[0].id not in self._tasks:
                    self._restore(snapshot)
                self._fail(e, "Failed to delete task")
                raise

    async def move_task(self, active_id: str, over: DropTarget | None) -> None:
        """
        Handle the end of a drag of ``active_id`` onto ``over``.

        Same column: local reorder, no server call. Different column: status
        change applied locally, then sent; restored if the call fails.
        Dropping outside any target, on an unknown task, or on the task's
        own column does nothing.
        """
        if over is None or active_id not in self._tasks:
            return
        target = self._resolve_column(over)
        if target is None:
            return

        if self._tasks[active_id].status == target:
            self._reorder(active_id, over)
            return

        async with self._task_lock(active_id):
            # State may have moved on while an earlier call for this task ran
            task = self._tasks.get(active_id)
            if task is None or task.status == target:
                return

            snapshot = self._detach(active_id)
            moved = task.model_copy(update={"status": target})
            self._place(moved, self._drop_index(target, over))

            try:
                updated = await self._client.update_task(active_id, TaskUpdate(status=target))
            except ApiRequestError as e:
                if active_id in self._tasks:
                    self._restore(snapshot)
                    print(f"[BOARD] Rolled back move of task {active_id} to {snapshot[1].value}")
                self._fail(e, "Failed to move task")
                raise

            if active_id in self._tasks:
                self._merge(updated)

    # ── Internals ───────────────────────────────────────

    @asynccontextmanager
    async def _task_lock(self, task_id: str):
        lock = self._locks.setdefault(task_id, asyncio.Lock())
        self._lock_users[task_id] = self._lock_users.get(task_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[task_id] -= 1
            if not self._lock_users[task_id]:
                del self._lock_users[task_id]
                del self._locks[task_id]

    def _fail(self, exc: ApiRequestError, fallback: str) -> None:
        self._notify(exc.message or fallback)

    def _resolve_column(self, over: DropTarget) -> TaskStatus | None:
        if isinstance(over, ColumnTarget):
            return TaskStatus(over.status)
        if isinstance(over, TaskTarget):
            over_task = self._tasks.get(over.task_id)
            return over_task.status if over_task else None
        raise TypeError(f"Unsupported drop target: {over!r}")

    def _drop_index(self, status: TaskStatus, over: DropTarget) -> int | None:
        if isinstance(over, TaskTarget) and over.task_id in self._columns[status]:
            return self._columns[status].index(over.task_id)
        return None

    def _reorder(self, task_id: str, over: DropTarget) -> None:
        # A column has no index to move to, and a task cannot move onto itself
        if not isinstance(over, TaskTarget) or over.task_id == task_id:
            return
        column = self._columns[self._tasks[task_id].status]
        old_index = column.index(task_id)
        new_index = column.index(over.task_id)
        column.insert(new_index, column.pop(old_index))

    def _place(self, task: Task, index: int | None) -> None:
        """Put ``task`` into its status column; ``None`` appends."""
        column = self._columns[task.status]
        if index is None or index >= len(column):
            column.append(task.id)
        else:
            column.insert(max(index, 0), task.id)
        self._tasks[task.id] = task

    def _detach(self, task_id: str) -> Snapshot | None:
        task = self._tasks.pop(task_id, None)
        if task is None:
            return None
        column = self._columns[task.status]
        index = column.index(task_id)
        column.pop(index)
        return task, task.status, index

    def _restore(self, snapshot: Snapshot) -> None:
        task, status, index = snapshot
        self._detach(task.id)
        self._place(task.model_copy(update={"status": status}), index)

    def _merge(self, task: Task) -> None:
        """Take the server's copy of ``task``, keeping its slot unless the status changed."""
        current = self._tasks.get(task.id)
        if current is None:
            self._place(task, None)
        elif current.status != task.status:
            self._detach(task.id)
            self._place(task, None)
        else:
            self._tasks[task.id] = task
