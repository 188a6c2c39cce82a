# =====================================================
# FILE: task_manager/services/authorization.py
# Authorization Policy - (subject, action) decision table
# =====================================================

from enum import Enum
from typing import Dict, NamedTuple, Optional, Tuple
import logging

from task_manager.core.exceptions import Forbidden
from task_manager.core.permissions import Permission, has_permission
from task_manager.models.user import User

logger = logging.getLogger(__name__)


class Subject(str, Enum):
    TASK = "task"
    USER = "user"


class Action(str, Enum):
    VIEW = "view"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    ASSIGN = "assign"


class Rule(NamedTuple):
    any_record: Permission
    own_record: Optional[Permission] = None


POLICY: Dict[Tuple[Subject, Action], Rule] = {
    (Subject.TASK, Action.VIEW): Rule(Permission.TASK_VIEW_ANY, Permission.TASK_VIEW),
    (Subject.TASK, Action.CREATE): Rule(Permission.TASK_CREATE, Permission.TASK_CREATE),
    (Subject.TASK, Action.UPDATE): Rule(Permission.TASK_EDIT_ANY, Permission.TASK_EDIT),
    (Subject.TASK, Action.DELETE): Rule(Permission.TASK_DELETE_ANY, Permission.TASK_DELETE),
    (Subject.TASK, Action.ASSIGN): Rule(Permission.TASK_ASSIGN),

    (Subject.USER, Action.VIEW): Rule(Permission.USER_VIEW),
    (Subject.USER, Action.CREATE): Rule(Permission.USER_CREATE),
    (Subject.USER, Action.UPDATE): Rule(Permission.USER_EDIT),
    (Subject.USER, Action.DELETE): Rule(Permission.USER_DELETE),
}


def can(actor: User, action: Action, subject: Subject, owner_id: Optional[int] = None) -> bool:
    """
    Decide whether the actor may perform the action.

    owner_id is the id of the user owning the record, or None when the action
    does not target a single record (list, create) or the subject has no owner.
    """
    rule = POLICY.get((subject, action))
    if rule is None:
        return False

    if has_permission(actor.role, rule.any_record):
        return True

    if rule.own_record is None or not has_permission(actor.role, rule.own_record):
        return False

    return owner_id is None or owner_id == actor.id


def authorize(actor: User, action: Action, subject: Subject, owner_id: Optional[int] = None) -> None:
    """
    Raises:
        Forbidden: the policy denies the action
    """
    if not can(actor, action, subject, owner_id):
        logger.warning(
            f" Access denied for user {actor.id} ({actor.role}): "
            f"{action.value} {subject.value} owned by {owner_id}"
        )
        raise Forbidden()


def can_act_on_any(actor: User, action: Action, subject: Subject) -> bool:
    """True when the actor's role grants the action regardless of ownership"""
    rule = POLICY.get((subject, action))
    return rule is not None and has_permission(actor.role, rule.any_record)
