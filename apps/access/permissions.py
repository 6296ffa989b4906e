"""
DRF permissions backed by the access engine.
"""

from core.permissions import AccessRightPermission
from .rights import CompanyRight, UserRight, DepartmentRight, WorkDayRight


CRUD_METHOD_RIGHTS = {
    'GET': 'VIEW',
    'HEAD': 'VIEW',
    'OPTIONS': 'VIEW',
    'POST': 'CREATE',
    'PUT': 'EDIT',
    'PATCH': 'EDIT',
    'DELETE': 'REMOVE',
}


def _method_rights(rights, names):
    return {method: rights[name] for method, name in names.items()}


class HasCompanyRight(AccessRightPermission):
    """Company access; the view may pin a right with `company_right`."""

    rights = CompanyRight
    method_rights = _method_rights(CompanyRight, CRUD_METHOD_RIGHTS)
    view_right_attribute = 'company_right'

    def check(self, engine, user, target_id, right):
        return engine.has_company_right(user, target_id, right)


class HasUserRight(AccessRightPermission):
    """User access; the view may pin a right with `user_right`."""

    rights = UserRight
    method_rights = _method_rights(UserRight, CRUD_METHOD_RIGHTS)
    view_right_attribute = 'user_right'

    def check(self, engine, user, target_id, right):
        return engine.has_user_right(user, target_id, right)


class HasDepartmentRight(AccessRightPermission):
    """Department access; ASSIGN and ADD_PARTICIPANT are pinned with `department_right`."""

    rights = DepartmentRight
    method_rights = _method_rights(DepartmentRight, CRUD_METHOD_RIGHTS)
    view_right_attribute = 'department_right'

    def check(self, engine, user, target_id, right):
        return engine.has_department_right(user, target_id, right)


class HasWorkDayRight(AccessRightPermission):
    """Work-day access for the records of the user named by `owner_pk`."""

    rights = WorkDayRight
    method_rights = {
        'GET': WorkDayRight.VIEW,
        'HEAD': WorkDayRight.VIEW,
        'POST': WorkDayRight.ADD_TIME,
        'DELETE': WorkDayRight.SUBTRACT_TIME,
    }
    view_right_attribute = 'work_day_right'
    lookup_url_kwarg = 'owner_pk'

    def check(self, engine, user, target_id, right):
        return engine.has_work_day_right(user, target_id, right)
