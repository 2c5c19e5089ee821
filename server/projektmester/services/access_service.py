"""Project visibility and authorization policy.

Every read and mutation path consults this module; nothing else decides
who may see or change what.

    Action                          Allowed for
    ------                          -----------
    list / view project             admin, owner, assigned user
    edit project, manage children   admin, owner, assigned user
    create / delete project         admin
    manage users, add statuses      admin

The predicates never raise. Turning a negative answer into a rejected
request is the job of the API dependencies.
"""

from typing import Iterable

from projektmester.schemas.project import Project
from projektmester.schemas.user import UserRecord, UserRole


def is_admin(user: UserRecord) -> bool:
    return user.role == UserRole.ADMIN.value


def can_view_project(user: UserRecord, project: Project) -> bool:
    """Check whether a user may see a project.

    A project without an owner (created_by_id is None) is visible to
    non-admins only through assigned_users.
    """
    if is_admin(user):
        return True
    if project.created_by_id is not None and project.created_by_id == user.id:
        return True
    return user.id in (project.assigned_users or [])


def can_edit_project(user: UserRecord, project: Project) -> bool:
    """Editing follows visibility; the edit form has no extra role check."""
    return can_view_project(user, project)


def can_create_project(user: UserRecord) -> bool:
    return is_admin(user)


def can_delete_project(user: UserRecord) -> bool:
    return is_admin(user)


def can_manage_users(user: UserRecord) -> bool:
    return is_admin(user)


def visible_projects(user: UserRecord, all_projects: Iterable[Project]) -> list[Project]:
    """Return the projects a user is authorized to see, in stored order."""
    if is_admin(user):
        return list(all_projects)
    return [p for p in all_projects if can_view_project(user, p)]
