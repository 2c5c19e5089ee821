"""Project tasks API, including adjacent-swap reordering."""

import logging

from fastapi import APIRouter, HTTPException, status

from projektmester.api.deps import AccessibleProject, CurrentUser, DataService
from projektmester.schemas.task import Task, TaskCreate, TaskMove, TaskUpdate
from projektmester.services.ordering_service import move_task, next_task_order
from projektmester.services.project_data_service import ProjectDataService, new_id

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_project_task(data: ProjectDataService, project_id: str, task_id: str) -> Task:
    task = data.get_task(task_id)
    if task is None or task.project_id != project_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return task


@router.get("/{project_id}/tasks", response_model=list[Task])
def list_tasks(project: AccessibleProject, data: DataService):
    """List a project's tasks in display order."""
    return data.list_tasks(project.id)


@router.post("/{project_id}/tasks", response_model=Task, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    project: AccessibleProject,
    data: DataService,
    current_user: CurrentUser,
):
    """Append a task to the end of the project's list."""
    task = Task(
        **task_data.model_dump(mode="json"),
        id=new_id("t"),
        project_id=project.id,
        order=next_task_order(data.list_tasks(project.id)),
        created_by=current_user.name,
    )
    data.save_task(task)
    return task


@router.put("/{project_id}/tasks/{task_id}", response_model=Task)
def update_task(
    task_id: str,
    task_data: TaskUpdate,
    project: AccessibleProject,
    data: DataService,
):
    """Replace a task's editable fields. Order is kept."""
    task = _get_project_task(data, project.id, task_id)
    updated = task.model_copy(update=task_data.model_dump(mode="json"))
    data.save_task(updated)
    return updated


@router.delete("/{project_id}/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: str, project: AccessibleProject, data: DataService):
    """Delete a task; the remaining tasks are renumbered without gaps."""
    _get_project_task(data, project.id, task_id)
    data.delete_task(task_id)


@router.post("/{project_id}/tasks/{task_id}/move", response_model=list[Task])
def move_project_task(
    task_id: str,
    move: TaskMove,
    project: AccessibleProject,
    data: DataService,
):
    """Swap a task with its neighbour and return the reordered list.

    A move past either end of the list changes nothing.
    """
    _get_project_task(data, project.id, task_id)
    tasks = data.list_tasks(project.id)
    index = next(i for i, t in enumerate(tasks) if t.id == task_id)

    swapped = move_task(tasks, index, move.direction)
    if swapped is None:
        logger.debug(f"Ignored boundary move {move.direction.value} of task {task_id}")
        return tasks

    for task in swapped:
        data.save_task(task)
    return data.list_tasks(project.id)
