"""Demo data: two users and one renovation project.

Seeding is idempotent. Records are addressed by fixed ids, so running it
again only fills in what is missing.
"""

import logging

from projektmester.schemas.finance import Cost, Material
from projektmester.schemas.project import Project
from projektmester.schemas.task import Task
from projektmester.schemas.user import UserRecord
from projektmester.services.project_data_service import ProjectDataService

logger = logging.getLogger(__name__)

DEMO_USERS = [
    {"id": "u1", "email": "admin@projektmester.hu", "name": "Kovács Admin János", "role": "admin", "password": "admin"},
    {"id": "u2", "email": "user@projektmester.hu", "name": "Szabó Péter", "role": "user", "password": "user123"},
]

DEMO_PROJECT = {
    "id": "p1",
    "name": "Belvárosi Lakásfelújítás",
    "description": "Projekt célja:\nA teljes elektromos hálózat és vízhálózat cseréje, valamint burkolás.",
    "status": "kivitelezes",
    "customer_name": "Nagy Erzsébet",
    "customer_email": "nagy.erzsi@example.com",
    "customer_phone": "+36 30 123 4567",
    "location": "1051 Budapest, Sas utca 4.",
    "start_date": "2024-03-01",
    "end_date": "2024-05-15",
    "created_at": "2024-02-15T10:00:00Z",
    "created_by": "Kovács Admin János",
    "created_by_id": "u1",
    "assigned_users": ["u1", "u2"],
}

DEMO_TASKS = [
    {"id": "t1", "title": "Bontási munkák", "status": "done", "due_date": "2024-03-08", "order": 0},
    {"id": "t2", "title": "Elektromos hálózat cseréje", "status": "in_progress", "due_date": "2024-04-05", "order": 1},
    {"id": "t3", "title": "Burkolás", "status": "open", "due_date": "2024-05-10", "order": 2},
]

DEMO_MATERIALS = [
    {"id": "m1", "name": "Csempe 30x60", "quantity": 24.5, "unit": "m2", "unit_price": 8900, "supplier": "Burkolat Kft."},
    {"id": "m2", "name": "Villanyvezeték NYM-J 3x2,5", "quantity": 150, "unit": "m", "unit_price": 420},
]

DEMO_COSTS = [
    {"id": "c1", "type": "munkadij", "description": "Villanyszerelés", "amount": 450000},
    {"id": "c2", "type": "egyeb", "description": "Sittszállítás", "amount": 65000},
]


def seed_demo_data(data: ProjectDataService) -> dict[str, int]:
    """Insert the demo records that are not yet present.

    Returns:
        Number of records created per kind
    """
    created = {"users": 0, "projects": 0, "tasks": 0, "materials": 0, "costs": 0}

    for user in DEMO_USERS:
        if data.get_user(user["id"]) is None and data.get_user_by_email(user["email"]) is None:
            data.save_user(UserRecord(**user))
            created["users"] += 1

    project_id = DEMO_PROJECT["id"]
    if data.get_project(project_id) is None:
        data.save_project(Project(**DEMO_PROJECT))
        created["projects"] += 1

    for task in DEMO_TASKS:
        if data.get_task(task["id"]) is None:
            data.save_task(Task(**task, project_id=project_id, created_by=DEMO_PROJECT["created_by"]))
            created["tasks"] += 1

    for material in DEMO_MATERIALS:
        if data.get_material(material["id"]) is None:
            data.save_material(Material(**material, project_id=project_id))
            created["materials"] += 1

    for cost in DEMO_COSTS:
        if data.get_cost(cost["id"]) is None:
            data.save_cost(Cost(**cost, project_id=project_id))
            created["costs"] += 1

    logger.info(f"Demo seed created {created}")
    return created
