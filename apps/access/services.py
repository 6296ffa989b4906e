"""
Authorization engine deciding whether an acting user may perform an action on
a company, user, department or work-day record.
"""

import logging
from django.core.exceptions import ImproperlyConfigured, ValidationError

from apps.organization.models import User
from apps.organization.services import UserService, DepartmentService, RelationService
from core.exceptions import NotFoundException, InvalidArgumentException
from .rights import CompanyRight, UserRight, DepartmentRight, WorkDayRight

logger = logging.getLogger(__name__)


class AccessService:
    """
    Evaluates access rights against the current organizational state.

    Trust is layered: admins of a company act on anything inside it, managers
    act on departments they own or that are owned by someone beneath them in
    the reporting hierarchy, and every member acts on their own user record.
    Members of a disabled company lose almost all rights.

    The service keeps no state between calls. Collaborators are only queried:
    `user_service.find` and `department_service.find` return the entity or
    None, `relation_service.is_manager(manager, subordinate)` answers the
    transitive reporting question.
    """

    def __init__(self, user_service=None, department_service=None, relation_service=None):
        self.user_service = user_service or UserService()
        self.department_service = department_service or DepartmentService()
        self.relation_service = relation_service or RelationService()

        self._company_handlers = {
            CompanyRight.VIEW: self._can_view_company,
            CompanyRight.EDIT: self._can_manage_company,
            CompanyRight.REMOVE: self._can_manage_company,
            CompanyRight.CREATE: self._can_create_company,
        }
        self._user_handlers = {
            UserRight.VIEW: self._can_view_user,
            UserRight.GET_STATUS: self._can_view_user,
            UserRight.EDIT: self._can_edit_user,
            UserRight.REMOVE: self._can_remove_user,
            UserRight.CREATE: self._can_create_user,
            UserRight.SET_STATUS: self._can_set_user_status,
        }
        self._department_handlers = {
            DepartmentRight.VIEW: self._can_view_department,
            DepartmentRight.EDIT: self._can_manage_department,
            DepartmentRight.REMOVE: self._can_manage_department,
            DepartmentRight.CREATE: self._can_create_department,
            DepartmentRight.ASSIGN: self._can_assign_department,
            DepartmentRight.ADD_PARTICIPANT: self._can_add_department_participant,
        }
        self._work_day_handlers = {
            WorkDayRight.VIEW: self._can_view_or_subtract_time,
            WorkDayRight.SUBTRACT_TIME: self._can_view_or_subtract_time,
            WorkDayRight.ADD_TIME: self._can_add_time,
        }

        for rights, handlers in (
            (CompanyRight, self._company_handlers),
            (UserRight, self._user_handlers),
            (DepartmentRight, self._department_handlers),
            (WorkDayRight, self._work_day_handlers),
        ):
            missing = [right.name for right in rights if right not in handlers]
            if missing:
                raise ImproperlyConfigured(f"No access rule for {rights.__name__}: {', '.join(missing)}")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def is_admin(self, user):
        if user is None:
            raise InvalidArgumentException('User is required')
        return self._has_admin_rights(user)

    def has_company_right(self, current_user, company_id, right):
        handler = self._get_handler(self._company_handlers, right, CompanyRight)
        allowed = handler(current_user, company_id)
        self._log_decision(current_user, company_id, right, allowed)
        return allowed

    def has_user_right(self, current_user, user_id, right):
        handler = self._get_handler(self._user_handlers, right, UserRight)
        allowed = handler(current_user, user_id)
        self._log_decision(current_user, user_id, right, allowed)
        return allowed

    def has_department_right(self, current_user, department_id, right):
        """
        Department rights are only ever granted inside the acting user's own
        enabled company; the remaining checks run against that company.
        """
        handler = self._get_handler(self._department_handlers, right, DepartmentRight)
        company = self._get_enabled_company(current_user)
        if company is None:
            allowed = False
        else:
            allowed = handler(current_user, company, department_id)
        self._log_decision(current_user, department_id, right, allowed)
        return allowed

    def has_work_day_right(self, current_user, owner_id, right):
        """
        Work-day records are reachable only when their owner belongs to the
        acting user's enabled company.
        """
        handler = self._get_handler(self._work_day_handlers, right, WorkDayRight)
        allowed = False
        company = self._get_enabled_company(current_user)
        if company is not None:
            self._require(owner_id, 'Work day owner id')
            owner = self._get_user(owner_id)
            if owner.company is not None and self._same_id(owner.company.id, company.id):
                allowed = handler(current_user, owner)
        self._log_decision(current_user, owner_id, right, allowed)
        return allowed

    def is_user_can_be_added_to_department(self, user_id, department_id):
        user = self._get_user(user_id)
        department = self._get_department(department_id)

        if not self._belongs_to_department_company(user, department):
            return False

        owner = department.owner
        if owner is not None and not self._same_id(owner.id, user_id):
            # the participant must not already manage the department owner
            return not self.relation_service.is_manager(user, owner)

        return True

    def is_user_can_be_removed_from_department(self, user_id, department_id):
        department = self._get_department(department_id)
        user = self._get_user(user_id)

        if not self._belongs_to_department_company(user, department):
            return False

        return department.owner is None or not self._same_id(department.owner.id, user_id)

    # ------------------------------------------------------------------
    # Company rules
    # ------------------------------------------------------------------

    def _can_view_company(self, current_user, company_id):
        self._require(company_id, 'Company id')
        company = current_user.company
        if company is not None and (self._has_admin_rights(current_user) or company.enabled):
            return self._same_id(company.id, company_id)
        return False

    def _can_manage_company(self, current_user, company_id):
        self._require(company_id, 'Company id')
        company = current_user.company
        if company is not None:
            return self._has_admin_rights(current_user) and self._same_id(company.id, company_id)
        return False

    def _can_create_company(self, current_user, company_id):
        company = current_user.company
        return self._has_admin_rights(current_user) and (company is None or not company.enabled)

    # ------------------------------------------------------------------
    # User rules
    # ------------------------------------------------------------------

    def _can_view_user(self, current_user, user_id):
        self._require(user_id, 'User id')
        if self._same_id(current_user.id, user_id):
            return True
        return self._is_colleague(current_user, user_id)

    def _can_edit_user(self, current_user, user_id):
        self._require(user_id, 'User id')
        if self._same_id(current_user.id, user_id):
            return True
        return self._is_colleague(current_user, user_id, admin_only=True)

    def _can_remove_user(self, current_user, user_id):
        self._require(user_id, 'User id')
        if self._same_id(current_user.id, user_id) and self._has_admin_rights(current_user):
            return True
        return self._is_colleague(current_user, user_id, admin_only=True)

    def _can_create_user(self, current_user, user_id):
        if self._get_enabled_company(current_user) is None:
            return False
        return self._has_admin_rights(current_user)

    def _can_set_user_status(self, current_user, user_id):
        return self._same_id(current_user.id, user_id)

    def _is_colleague(self, current_user, user_id, admin_only=False):
        company = self._get_enabled_company(current_user)
        if company is None:
            return False
        subject = self._get_user(user_id)
        if subject.company is None:
            return False
        if admin_only and not self._has_admin_rights(current_user):
            return False
        return self._same_id(subject.company.id, company.id)

    # ------------------------------------------------------------------
    # Department rules
    # ------------------------------------------------------------------

    def _can_view_department(self, current_user, company, department_id):
        self._require(department_id, 'Department id')
        department = self._get_department(department_id)
        return self._same_id(department.company.id, company.id)

    def _can_manage_department(self, current_user, company, department_id):
        self._require(department_id, 'Department id')
        department = self._get_department(department_id)
        if not self._same_id(department.company.id, company.id):
            return False
        if self._has_admin_rights(current_user):
            return True
        if self._has_manager_rights(current_user) and department.owner is not None:
            return self._same_id(current_user.id, department.owner.id)
        return False

    def _can_create_department(self, current_user, company, department_id):
        return self._has_manager_rights(current_user)

    def _can_assign_department(self, current_user, company, department_id):
        self._require(department_id, 'Department id')
        department = self._get_department(department_id)
        if not self._same_id(department.company.id, company.id):
            return False
        if self._has_admin_rights(current_user):
            return True
        if self._has_manager_rights(current_user):
            owner = department.owner
            return (
                owner is None
                or self._same_id(owner.id, current_user.id)
                or self.relation_service.is_manager(current_user, owner)
            )
        return False

    def _can_add_department_participant(self, current_user, company, department_id):
        self._require(department_id, 'Department id')
        department = self._get_department(department_id)
        if not self._same_id(department.company.id, company.id):
            return False
        if self._has_admin_rights(current_user):
            return True
        owner = department.owner
        if self._has_manager_rights(current_user) and owner is not None:
            return (
                self._same_id(owner.id, current_user.id)
                or self.relation_service.is_manager(current_user, owner)
            )
        return False

    # ------------------------------------------------------------------
    # Work-day rules
    # ------------------------------------------------------------------

    def _can_view_or_subtract_time(self, current_user, owner):
        return (
            self._has_admin_rights(current_user)
            or self._same_id(current_user.id, owner.id)
            or self.relation_service.is_manager(current_user, owner)
        )

    def _can_add_time(self, current_user, owner):
        # Owners cannot add time to their own records
        return (
            self._has_admin_rights(current_user)
            or self.relation_service.is_manager(current_user, owner)
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _belongs_to_department_company(self, user, department):
        company = user.company
        if company is None or not company.enabled or not department.company.enabled:
            return False
        return self._same_id(company.id, department.company.id)

    def _get_user(self, user_id):
        try:
            user = self.user_service.find(user_id)
        except ValidationError:
            raise InvalidArgumentException(f"Malformed user id: {user_id}")
        if user is None:
            logger.warning(f"User {user_id} not found")
            raise NotFoundException(f"Can't find user with id {user_id}")
        return user

    def _get_department(self, department_id):
        try:
            department = self.department_service.find(department_id)
        except ValidationError:
            raise InvalidArgumentException(f"Malformed department id: {department_id}")
        if department is None:
            logger.warning(f"Department {department_id} not found")
            raise NotFoundException(f"Can't find department with id {department_id}")
        return department

    @staticmethod
    def _get_handler(handlers, right, rights):
        if not isinstance(right, rights):
            raise InvalidArgumentException(f"{right!r} is not a {rights.__name__}")
        return handlers[right]

    @staticmethod
    def _get_enabled_company(user):
        company = user.company
        if company is None or not company.enabled:
            return None
        return company

    @staticmethod
    def _require(value, name):
        if value is None:
            raise InvalidArgumentException(f"{name} is required")

    @staticmethod
    def _same_id(first, second):
        return first is not None and second is not None and str(first) == str(second)

    @staticmethod
    def _has_admin_rights(user):
        return user.role == User.ADMIN

    @staticmethod
    def _has_manager_rights(user):
        return user.role in (User.ADMIN, User.MANAGER)

    @staticmethod
    def _log_decision(current_user, target_id, right, allowed):
        logger.debug(
            f"{type(right).__name__}.{right.name} {'granted' if allowed else 'denied'}",
            extra={
                'user_id': current_user.id,
                'target_id': target_id,
                'right': right.value,
                'company_id': current_user.company_id,
            }
        )
