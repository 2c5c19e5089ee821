"""Tests for task endpoints and reordering."""


def orders(response):
    return [(t["id"], t["order"]) for t in response.json()]


class TestTaskCrud:
    """Creating, editing and deleting tasks."""

    def test_create_appends_at_count(self, client, user_headers, project_tasks):
        """Should give a new task order = current task count."""
        response = client.post(
            "/api/projects/p1/tasks",
            json={"title": "Festés", "status": "open", "due_date": "2024-05-01"},
            headers=user_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["order"] == 3
        assert body["project_id"] == "p1"
        assert body["created_by"] == "Szabó Péter"

    def test_list_in_order(self, client, user_headers, project_tasks):
        """Should list tasks sorted by order."""
        response = client.get("/api/projects/p1/tasks", headers=user_headers)

        assert orders(response) == [("t1", 0), ("t2", 1), ("t3", 2)]

    def test_update_keeps_order(self, client, user_headers, project_tasks):
        """Should replace editable fields without touching order."""
        response = client.put(
            "/api/projects/p1/tasks/t3",
            json={"title": "Burkolás és fugázás", "status": "in_progress"},
            headers=user_headers,
        )

        assert response.status_code == 200
        assert response.json()["order"] == 2
        assert response.json()["status"] == "in_progress"

    def test_invalid_status(self, client, user_headers, project_tasks):
        """Should reject a task status outside the workflow."""
        response = client.put(
            "/api/projects/p1/tasks/t1",
            json={"title": "Bontás", "status": "archived"},
            headers=user_headers,
        )

        assert response.status_code == 422

    def test_delete_then_append_does_not_collide(self, client, user_headers, project_tasks):
        """Should renumber after delete so the next append gets a free order."""
        assert client.delete("/api/projects/p1/tasks/t1", headers=user_headers).status_code == 204
        client.post("/api/projects/p1/tasks", json={"title": "Takarítás"}, headers=user_headers)

        listed = client.get("/api/projects/p1/tasks", headers=user_headers).json()
        assert [t["order"] for t in listed] == [0, 1, 2]
        assert listed[-1]["title"] == "Takarítás"

    def test_task_of_other_project(self, client, admin_headers, project_tasks, data, test_project):
        """Should answer 404 for a task addressed through the wrong project."""
        data.save_project(test_project.model_copy(update={"id": "p2"}))

        response = client.put("/api/projects/p2/tasks/t1", json={"title": "X"}, headers=admin_headers)

        assert response.status_code == 404

    def test_unassigned_user_forbidden(self, client, other_headers, project_tasks):
        """Should reject task access on a project the caller cannot see."""
        assert client.get("/api/projects/p1/tasks", headers=other_headers).status_code == 403


class TestTaskMove:
    """Adjacent-swap reordering."""

    def test_move_up(self, client, user_headers, project_tasks):
        """Should swap a task with its predecessor."""
        response = client.post("/api/projects/p1/tasks/t2/move", json={"direction": "up"}, headers=user_headers)

        assert response.status_code == 200
        assert orders(response) == [("t2", 0), ("t1", 1), ("t3", 2)]

    def test_move_down(self, client, user_headers, project_tasks):
        """Should swap a task with its successor."""
        response = client.post("/api/projects/p1/tasks/t2/move", json={"direction": "down"}, headers=user_headers)

        assert orders(response) == [("t1", 0), ("t3", 1), ("t2", 2)]

    def test_boundary_move_is_noop(self, client, user_headers, project_tasks):
        """Should leave the order unchanged when moving past an end."""
        first = client.post("/api/projects/p1/tasks/t1/move", json={"direction": "up"}, headers=user_headers)
        last = client.post("/api/projects/p1/tasks/t3/move", json={"direction": "down"}, headers=user_headers)

        assert orders(first) == [("t1", 0), ("t2", 1), ("t3", 2)]
        assert orders(last) == [("t1", 0), ("t2", 1), ("t3", 2)]

    def test_bad_direction(self, client, user_headers, project_tasks):
        """Should reject directions other than up/down."""
        response = client.post("/api/projects/p1/tasks/t2/move", json={"direction": "left"}, headers=user_headers)

        assert response.status_code == 422
