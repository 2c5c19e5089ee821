"""Task ordering within a project.

Tasks carry an integer ``order`` that defines display sequence. A move
swaps the order values of two neighbours and touches nothing else, so
the multiset of order values is unchanged by any sequence of moves.
"""

from projektmester.schemas.task import MoveDirection, Task


def sort_tasks(tasks: list[Task]) -> list[Task]:
    """Sort by order. Python's sort is stable, so ties keep stored order."""
    return sorted(tasks, key=lambda t: t.order)


def next_task_order(tasks: list[Task]) -> int:
    """Order value for a task appended to the end of the project."""
    return len(tasks)


def move_task(
    tasks: list[Task],
    index: int,
    direction: MoveDirection | str,
) -> tuple[Task, Task] | None:
    """Swap the order of tasks[index] with its neighbour.

    Args:
        tasks: The project's tasks, sorted by order
        index: Position of the task to move in ``tasks``
        direction: "up" (towards index 0) or "down"

    Returns:
        The two updated tasks (moved task first), or None when the move
        would cross a boundary. The input list is not modified; the
        caller persists both records and reloads.
    """
    direction = MoveDirection(direction)
    target = index - 1 if direction == MoveDirection.UP else index + 1

    if index < 0 or index >= len(tasks):
        return None
    if target < 0 or target >= len(tasks):
        return None

    current, neighbour = tasks[index], tasks[target]
    moved = current.model_copy(update={"order": neighbour.order})
    swapped = neighbour.model_copy(update={"order": current.order})
    return moved, swapped


def densify_orders(tasks: list[Task]) -> list[Task]:
    """Renumber tasks to 0..N-1 keeping their current sequence.

    Returns only the tasks whose order value changed.
    """
    changed = []
    for position, task in enumerate(sort_tasks(tasks)):
        if task.order != position:
            changed.append(task.model_copy(update={"order": position}))
    return changed
