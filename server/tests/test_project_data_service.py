"""Tests for typed record access, normalization and cascades."""

from projektmester.records import RecordKind
from projektmester.schemas.finance import Cost
from projektmester.schemas.file import AppFile
from projektmester.services.project_data_service import ProjectDataService


class TestReadNormalization:
    """Legacy records must read cleanly."""

    def test_missing_assignment_and_owner(self, store, data):
        """Should default assigned_users to [] and owner to the no-owner sentinel."""
        store.save_all(RecordKind.PROJECTS, [{"id": "p9", "name": "Régi projekt", "assigned_users": None}])
        project = data.get_project("p9")

        assert project.assigned_users == []
        assert project.created_by_id is None
        assert project.customer_name == ""

    def test_null_and_blank_name_and_status(self, store, data):
        """Should read null or blank name and status as empty strings."""
        store.save_all(RecordKind.PROJECTS, [
            {"id": "p7", "name": "Régi", "status": None},
            {"id": "p8", "name": "Régi", "status": ""},
            {"id": "p9", "name": None},
        ])

        projects = data.list_projects()

        assert [(p.id, p.name, p.status) for p in projects] == [
            ("p7", "Régi", ""),
            ("p8", "Régi", ""),
            ("p9", "", ""),
        ]

    def test_null_fields_in_children_and_users(self, store, data):
        """Should read tasks, materials, costs and users with null fields."""
        store.upsert(RecordKind.TASKS, {"id": "t9", "project_id": "p9", "title": None, "status": None, "order": None})
        store.upsert(RecordKind.MATERIALS, {"id": "m9", "project_id": "p9", "name": None, "quantity": None, "unit_price": None})
        store.upsert(RecordKind.COSTS, {"id": "c9", "project_id": "p9", "type": None, "description": None, "amount": None})
        store.upsert(RecordKind.USERS, {"id": "u9", "email": None, "name": None})

        task = data.list_tasks("p9")[0]
        material = data.list_materials("p9")[0]
        cost = data.list_costs("p9")[0]
        user = data.get_user("u9")

        assert (task.title, task.status, task.order) == ("", "", 0)
        assert (material.name, material.quantity, material.unit_price) == ("", 0, 0)
        assert (cost.type, cost.description, cost.amount) == ("", "", 0)
        assert (user.email, user.name, user.role) == ("", "", "user")
        assert user.is_admin is False

    def test_unknown_codes_kept(self, store, data):
        """Should read unknown status, unit and cost type strings verbatim."""
        store.upsert(RecordKind.PROJECTS, {"id": "p9", "name": "X", "status": "garancia"})
        store.upsert(RecordKind.MATERIALS, {"id": "m9", "project_id": "p9", "name": "Y", "unit": "zsák"})
        store.upsert(RecordKind.COSTS, {"id": "c9", "project_id": "p9", "type": "szallitas", "amount": 10})

        assert data.get_project("p9").status == "garancia"
        assert data.list_materials("p9")[0].unit == "zsák"
        assert data.list_costs("p9")[0].type == "szallitas"


class TestTasks:
    """Task listing and deletion."""

    def test_list_sorted_by_order(self, data, project_tasks):
        """Should return tasks sorted by order."""
        data.save_task(project_tasks[0].model_copy(update={"order": 5}))

        assert [t.id for t in data.list_tasks("p1")] == ["t2", "t3", "t1"]

    def test_delete_redensifies(self, data, project_tasks):
        """Should renumber remaining tasks so the next append does not collide."""
        assert data.delete_task("t1") is True

        assert [(t.id, t.order) for t in data.list_tasks("p1")] == [("t2", 0), ("t3", 1)]

    def test_delete_missing_task(self, data):
        """Should return False for an unknown task."""
        assert data.delete_task("nope") is False


class TestProjectDelete:
    """Project deletion with and without cascade."""

    def test_default_leaves_children(self, data, project_tasks, project_finances):
        """Should keep child records when cascade is off."""
        assert data.delete_project("p1") is True

        assert data.get_project("p1") is None
        assert len(data.list_tasks("p1")) == 3
        assert len(data.list_materials("p1")) == 2

    def test_cascade_removes_only_that_project(self, data, project_tasks, project_finances):
        """Should remove the project's children and nothing else."""
        data.save_cost(Cost(id="c-other", project_id="p2", description="Más", amount=5))
        data.save_file(AppFile(id="f1", filename="a.jpg", file_path="/files/a.jpg", project_id="p1"))

        assert data.delete_project("p1", cascade=True) is True

        assert data.list_tasks("p1") == []
        assert data.list_materials("p1") == []
        assert data.list_costs("p1") == []
        assert data.list_files("p1") == []
        assert [c.id for c in data.list_costs("p2")] == ["c-other"]

    def test_missing_project(self, data):
        """Should return False for an unknown project."""
        assert data.delete_project("nope", cascade=True) is False


class TestStatusesAndUsers:
    """Status registry and user helpers."""

    def test_default_statuses(self, data):
        """Should return the four defaults before anything is added."""
        assert data.list_statuses() == ["felmeres", "arajanlat", "kivitelezes", "kesz"]

    def test_add_status_is_idempotent(self, data):
        """Should append once and keep the defaults."""
        data.add_status("garancia")
        data.add_status("garancia")

        assert data.list_statuses() == ["felmeres", "arajanlat", "kivitelezes", "kesz", "garancia"]

    def test_user_lookup_by_email_ignores_case(self, data, admin_user):
        """Should find users by email regardless of case."""
        assert data.get_user_by_email("ADMIN@projektmester.hu").id == admin_user.id
        assert data.get_user_by_email("nincs@example.com") is None

    def test_bootstrap_admin_only_when_empty(self, store):
        """Should create an admin only when no users exist."""
        data = ProjectDataService(store)
        admin = data.ensure_bootstrap_admin("Boss@Example.com", "secret", "Főnök")

        assert admin.role == "admin"
        assert admin.email == "boss@example.com"
        assert data.ensure_bootstrap_admin("x@example.com", "y", "Z") is None
        assert len(data.list_users()) == 1
