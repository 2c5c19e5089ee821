"""Typed access to the record store.

Wraps a ``RecordStore`` and converts between stored JSON records and
the entity schemas. Reads normalize legacy data (missing assignment
lists, missing owners, nulls); writes always store the full record.
"""

import logging
import uuid
from datetime import datetime, timezone

from projektmester.labels import DEFAULT_PROJECT_STATUSES
from projektmester.records import RecordKind, RecordStore
from projektmester.schemas.file import AppFile
from projektmester.schemas.finance import Material, Cost
from projektmester.schemas.project import Project
from projektmester.schemas.task import Task
from projektmester.schemas.user import UserRecord, UserRole
from projektmester.services.ordering_service import densify_orders, sort_tasks

logger = logging.getLogger(__name__)

# Child kinds owned by a project through project_id
_PROJECT_CHILD_KINDS = (
    RecordKind.TASKS,
    RecordKind.MATERIALS,
    RecordKind.COSTS,
    RecordKind.FILES,
)


def new_id(prefix: str) -> str:
    """Generate an opaque record id such as 'p-3f2a9c1b7d4e'."""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def today_iso() -> str:
    return datetime.now(timezone.utc).date().isoformat()


class ProjectDataService:
    """Entity-level operations over an injected record store."""

    def __init__(self, store: RecordStore):
        self.store = store

    # --- Projects ---

    def list_projects(self) -> list[Project]:
        return [Project.model_validate(r) for r in self.store.load_all(RecordKind.PROJECTS)]

    def get_project(self, project_id: str) -> Project | None:
        record = self.store.get(RecordKind.PROJECTS, project_id)
        return Project.model_validate(record) if record else None

    def save_project(self, project: Project) -> Project:
        self.store.upsert(RecordKind.PROJECTS, project.model_dump(mode="json"))
        return project

    def delete_project(self, project_id: str, cascade: bool = False) -> bool:
        """Delete a project.

        Without ``cascade`` the project's tasks, materials, costs and files
        stay in the store, orphaned. With it they are removed too.
        """
        deleted = self.store.delete_by_id(RecordKind.PROJECTS, project_id)
        if deleted and cascade:
            for kind in _PROJECT_CHILD_KINDS:
                records = self.store.load_all(kind)
                kept = [r for r in records if r.get("project_id") != project_id]
                if len(kept) != len(records):
                    self.store.save_all(kind, kept)
                    logger.info(f"Removed {len(records) - len(kept)} {kind.value} of project {project_id}")
        return deleted

    # --- Users ---

    def list_users(self) -> list[UserRecord]:
        return [UserRecord.model_validate(r) for r in self.store.load_all(RecordKind.USERS)]

    def get_user(self, user_id: str) -> UserRecord | None:
        record = self.store.get(RecordKind.USERS, user_id)
        return UserRecord.model_validate(record) if record else None

    def get_user_by_email(self, email: str) -> UserRecord | None:
        email = email.strip().lower()
        for user in self.list_users():
            if user.email.strip().lower() == email:
                return user
        return None

    def save_user(self, user: UserRecord) -> UserRecord:
        self.store.upsert(RecordKind.USERS, user.model_dump(mode="json"))
        return user

    def ensure_bootstrap_admin(self, email: str, password: str, name: str) -> UserRecord | None:
        """Create the first admin when no users exist. Returns it, or None."""
        if self.store.load_all(RecordKind.USERS):
            return None
        admin = UserRecord(
            id=new_id("u"),
            email=email.strip().lower(),
            name=name,
            role=UserRole.ADMIN.value,
            password=password,
        )
        self.save_user(admin)
        logger.info(f"Created bootstrap admin {admin.email}")
        return admin

    # --- Tasks ---

    def list_tasks(self, project_id: str) -> list[Task]:
        """Tasks of a project sorted by order."""
        tasks = [
            Task.model_validate(r)
            for r in self.store.load_all(RecordKind.TASKS)
            if r.get("project_id") == project_id
        ]
        return sort_tasks(tasks)

    def get_task(self, task_id: str) -> Task | None:
        record = self.store.get(RecordKind.TASKS, task_id)
        return Task.model_validate(record) if record else None

    def save_task(self, task: Task) -> Task:
        self.store.upsert(RecordKind.TASKS, task.model_dump(mode="json"))
        return task

    def delete_task(self, task_id: str) -> bool:
        """Delete a task and close the gap it leaves in its project's order."""
        task = self.get_task(task_id)
        if task is None:
            return False
        self.store.delete_by_id(RecordKind.TASKS, task_id)
        for changed in densify_orders(self.list_tasks(task.project_id)):
            self.save_task(changed)
        return True

    # --- Materials ---

    def list_materials(self, project_id: str) -> list[Material]:
        return [
            Material.model_validate(r)
            for r in self.store.load_all(RecordKind.MATERIALS)
            if r.get("project_id") == project_id
        ]

    def get_material(self, material_id: str) -> Material | None:
        record = self.store.get(RecordKind.MATERIALS, material_id)
        return Material.model_validate(record) if record else None

    def save_material(self, material: Material) -> Material:
        self.store.upsert(RecordKind.MATERIALS, material.model_dump(mode="json"))
        return material

    def delete_material(self, material_id: str) -> bool:
        return self.store.delete_by_id(RecordKind.MATERIALS, material_id)

    # --- Costs ---

    def list_costs(self, project_id: str) -> list[Cost]:
        return [
            Cost.model_validate(r)
            for r in self.store.load_all(RecordKind.COSTS)
            if r.get("project_id") == project_id
        ]

    def get_cost(self, cost_id: str) -> Cost | None:
        record = self.store.get(RecordKind.COSTS, cost_id)
        return Cost.model_validate(record) if record else None

    def save_cost(self, cost: Cost) -> Cost:
        self.store.upsert(RecordKind.COSTS, cost.model_dump(mode="json"))
        return cost

    def delete_cost(self, cost_id: str) -> bool:
        return self.store.delete_by_id(RecordKind.COSTS, cost_id)

    # --- Files ---

    def list_files(self, project_id: str, task_id: str | None = None) -> list[AppFile]:
        files = [
            AppFile.model_validate(r)
            for r in self.store.load_all(RecordKind.FILES)
            if r.get("project_id") == project_id
        ]
        if task_id is not None:
            files = [f for f in files if f.task_id == task_id]
        return files

    def get_file(self, file_id: str) -> AppFile | None:
        record = self.store.get(RecordKind.FILES, file_id)
        return AppFile.model_validate(record) if record else None

    def save_file(self, app_file: AppFile) -> AppFile:
        self.store.upsert(RecordKind.FILES, app_file.model_dump(mode="json"))
        return app_file

    def delete_file(self, file_id: str) -> bool:
        return self.store.delete_by_id(RecordKind.FILES, file_id)

    # --- Custom statuses ---

    def list_statuses(self) -> list[str]:
        """Registered project statuses; the defaults until one is added."""
        records = self.store.load_all(RecordKind.CUSTOM_STATUSES)
        if not records:
            return list(DEFAULT_PROJECT_STATUSES)
        return [r["id"] for r in records]

    def add_status(self, value: str) -> list[str]:
        """Append a status if not present. There is no removal."""
        statuses = self.list_statuses()
        if value not in statuses:
            statuses.append(value)
            self.store.save_all(
                RecordKind.CUSTOM_STATUSES,
                [{"id": s} for s in statuses],
            )
            logger.info(f"Added project status '{value}'")
        return statuses
