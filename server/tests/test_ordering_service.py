"""Tests for task ordering."""

import itertools

from projektmester.schemas.task import Task
from projektmester.services.ordering_service import (
    densify_orders,
    move_task,
    next_task_order,
    sort_tasks,
)


def make_tasks(orders):
    return [Task(id=f"t{i}", project_id="p1", title=f"Task {i}", order=o) for i, o in enumerate(orders)]


def apply(tasks, result):
    """Return the task list with the swapped records substituted."""
    if result is None:
        return tasks
    by_id = {t.id: t for t in result}
    return [by_id.get(t.id, t) for t in tasks]


class TestMoveTask:
    """Tests for move_task."""

    def test_move_up_swaps_with_previous(self):
        """Should swap orders of index 1 and index 0."""
        tasks = make_tasks([0, 1, 2])
        moved, swapped = move_task(tasks, 1, "up")

        assert (moved.id, moved.order) == ("t1", 0)
        assert (swapped.id, swapped.order) == ("t0", 1)
        assert [t.order for t in apply(tasks, (moved, swapped))] == [1, 0, 2]

    def test_move_down_swaps_with_next(self):
        """Should swap orders of index 1 and index 2."""
        tasks = make_tasks([0, 1, 2])

        assert [t.order for t in apply(tasks, move_task(tasks, 1, "down"))] == [0, 2, 1]

    def test_boundary_moves_are_noops(self):
        """Should return None when moving past either end."""
        tasks = make_tasks([0, 1, 2])

        assert move_task(tasks, 0, "up") is None
        assert move_task(tasks, 2, "down") is None

    def test_out_of_range_index(self):
        """Should return None for an index outside the list."""
        tasks = make_tasks([0, 1])

        assert move_task(tasks, 5, "up") is None
        assert move_task(tasks, -1, "down") is None
        assert move_task([], 0, "down") is None

    def test_input_not_modified(self):
        """Should leave the given tasks untouched."""
        tasks = make_tasks([0, 1])
        move_task(tasks, 0, "down")

        assert [t.order for t in tasks] == [0, 1]

    def test_orders_remain_a_permutation(self):
        """Should keep the multiset of orders through any move sequence."""
        for moves in itertools.product([(0, "down"), (1, "up"), (2, "down"), (3, "up")], repeat=3):
            tasks = make_tasks([0, 1, 2, 3])
            for index, direction in moves:
                tasks = sort_tasks(apply(tasks, move_task(sort_tasks(tasks), index, direction)))
            assert sorted(t.order for t in tasks) == [0, 1, 2, 3]


class TestOrderHelpers:
    """Tests for sort_tasks / next_task_order / densify_orders."""

    def test_next_order_is_count(self):
        """Should append at the current task count."""
        assert next_task_order([]) == 0
        assert next_task_order(make_tasks([0, 1, 2])) == 3

    def test_sort_is_stable_on_ties(self):
        """Should keep stored order for tasks with equal order."""
        tasks = make_tasks([1, 0, 1])

        assert [t.id for t in sort_tasks(tasks)] == ["t1", "t0", "t2"]

    def test_densify_returns_only_changed(self):
        """Should renumber to 0..N-1 and return only changed tasks."""
        tasks = make_tasks([0, 2, 3])
        changed = densify_orders(tasks)

        assert [(t.id, t.order) for t in changed] == [("t1", 1), ("t2", 2)]
        assert densify_orders(make_tasks([0, 1])) == []
