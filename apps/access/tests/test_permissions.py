"""
Tests for DRF permissions and the engine over database-backed collaborators.
"""

import uuid
from types import SimpleNamespace
from django.contrib.auth.models import AnonymousUser
from django.test import TestCase

from apps.access.permissions import HasCompanyRight, HasUserRight, HasDepartmentRight, HasWorkDayRight
from apps.access.rights import DepartmentRight, UserRight, WorkDayRight
from apps.access.services import AccessService
from apps.organization.factories import CompanyFactory, UserFactory, DepartmentFactory, ManagerRelationFactory
from apps.organization.models import User
from core.exceptions import InvalidArgumentException, NotFoundException


def make_request(user, method='GET'):
    return SimpleNamespace(user=user, method=method)


def make_view(**kwargs):
    attributes = kwargs.pop('attributes', {})
    return SimpleNamespace(kwargs=kwargs, **attributes)


class OrganizationTestCase(TestCase):

    def setUp(self):
        self.company = CompanyFactory()
        self.admin = UserFactory(company=self.company, role=User.ADMIN)
        self.manager = UserFactory(company=self.company, role=User.MANAGER)
        self.owner = UserFactory(company=self.company, role=User.MANAGER)
        self.employee = UserFactory(company=self.company)
        self.department = DepartmentFactory(company=self.company, owner=self.owner)

        ManagerRelationFactory(manager=self.manager, subordinate=self.owner)
        ManagerRelationFactory(manager=self.owner, subordinate=self.employee)


class AccessServiceDatabaseTest(OrganizationTestCase):
    """The engine with its default ORM collaborators."""

    def setUp(self):
        super().setUp()
        self.engine = AccessService()

    def test_manager_of_owner_can_assign(self):
        self.assertTrue(self.engine.has_department_right(self.manager, self.department.id, DepartmentRight.ASSIGN))

    def test_owner_cannot_assign_from_superior(self):
        department = DepartmentFactory(company=self.company, owner=self.manager)
        self.assertFalse(self.engine.has_department_right(self.owner, department.id, DepartmentRight.ASSIGN))

    def test_transitive_manager_can_add_time(self):
        self.assertTrue(self.engine.has_work_day_right(self.manager, self.employee.id, WorkDayRight.ADD_TIME))

    def test_manager_of_owner_cannot_join_department(self):
        self.assertFalse(self.engine.is_user_can_be_added_to_department(self.manager.id, self.department.id))
        self.assertTrue(self.engine.is_user_can_be_added_to_department(self.employee.id, self.department.id))

    def test_disabled_company_freezes_department_rights(self):
        self.company.enabled = False
        self.company.save()
        admin = User.objects.select_related('company').get(pk=self.admin.pk)
        self.assertFalse(self.engine.has_department_right(admin, self.department.id, DepartmentRight.VIEW))
        self.assertFalse(self.engine.is_user_can_be_removed_from_department(self.employee.id, self.department.id))

    def test_unknown_department_raises_not_found(self):
        with self.assertRaises(NotFoundException):
            self.engine.has_department_right(self.admin, uuid.uuid4(), DepartmentRight.VIEW)

    def test_malformed_user_id_is_invalid(self):
        with self.assertRaises(InvalidArgumentException):
            self.engine.has_user_right(self.employee, 'not-a-uuid', UserRight.VIEW)
        with self.assertRaises(InvalidArgumentException):
            self.engine.has_work_day_right(self.admin, 'not-a-uuid', WorkDayRight.VIEW)

    def test_malformed_department_id_is_invalid(self):
        with self.assertRaises(InvalidArgumentException):
            self.engine.has_department_right(self.admin, 'not-a-uuid', DepartmentRight.EDIT)
        with self.assertRaises(InvalidArgumentException):
            self.engine.is_user_can_be_added_to_department(self.employee.id, 'not-a-uuid')

    def test_integer_user_id_is_not_found(self):
        with self.assertRaises(NotFoundException):
            self.engine.has_user_right(self.employee, 42, UserRight.VIEW)


class AccessRightPermissionTest(OrganizationTestCase):
    """Request methods and view attributes map onto engine rights."""

    def test_anonymous_user_is_denied(self):
        permission = HasCompanyRight()
        view = make_view(pk=str(self.company.id))
        self.assertFalse(permission.has_permission(make_request(AnonymousUser()), view))

    def test_company_view_and_edit(self):
        permission = HasCompanyRight()
        view = make_view(pk=str(self.company.id))
        self.assertTrue(permission.has_permission(make_request(self.employee, 'GET'), view))
        self.assertFalse(permission.has_permission(make_request(self.employee, 'PATCH'), view))
        self.assertTrue(permission.has_permission(make_request(self.admin, 'DELETE'), view))

    def test_unmapped_method_is_denied(self):
        permission = HasWorkDayRight()
        view = make_view(owner_pk=str(self.employee.id))
        self.assertFalse(permission.has_permission(make_request(self.admin, 'PUT'), view))

    def test_user_edit_by_admin(self):
        permission = HasUserRight()
        view = make_view(pk=str(self.employee.id))
        self.assertTrue(permission.has_permission(make_request(self.admin, 'PUT'), view))
        self.assertFalse(permission.has_permission(make_request(self.manager, 'PUT'), view))

    def test_user_create_needs_no_identifier(self):
        permission = HasUserRight()
        self.assertTrue(permission.has_permission(make_request(self.admin, 'POST'), make_view()))

    def test_view_pins_department_right(self):
        permission = HasDepartmentRight()
        view = make_view(pk=str(self.department.id), attributes={'department_right': DepartmentRight.ASSIGN})
        self.assertTrue(permission.has_permission(make_request(self.manager, 'POST'), view))

    def test_view_pins_department_right_by_name(self):
        permission = HasDepartmentRight()
        view = make_view(pk=str(self.department.id), attributes={'department_right': 'add_participant'})
        self.assertTrue(permission.has_permission(make_request(self.owner, 'POST'), view))
        self.assertFalse(permission.has_permission(make_request(self.employee, 'POST'), view))

    def test_unknown_right_name_is_invalid(self):
        permission = HasDepartmentRight()
        view = make_view(pk=str(self.department.id), attributes={'department_right': 'promote'})
        with self.assertRaises(InvalidArgumentException):
            permission.has_permission(make_request(self.admin, 'POST'), view)

    def test_work_day_owner_from_url(self):
        permission = HasWorkDayRight()
        view = make_view(owner_pk=str(self.employee.id))
        self.assertTrue(permission.has_permission(make_request(self.employee, 'GET'), view))
        self.assertFalse(permission.has_permission(make_request(self.employee, 'POST'), view))
        self.assertTrue(permission.has_permission(make_request(self.owner, 'POST'), view))

    def test_malformed_identifier_is_invalid(self):
        permission = HasCompanyRight()
        with self.assertRaises(InvalidArgumentException):
            permission.has_permission(make_request(self.admin), make_view(pk='not-a-uuid'))

    def test_missing_company_identifier_is_invalid(self):
        permission = HasCompanyRight()
        with self.assertRaises(InvalidArgumentException):
            permission.has_permission(make_request(self.admin, 'GET'), make_view())


class EmailPrincipalCompanyRight(HasCompanyRight):
    """Resolves the organization user from an authenticated principal's email."""

    def get_acting_user(self, request):
        return User.objects.select_related('company').filter(email=request.user.email).first()


class ActingUserHookTest(OrganizationTestCase):

    def test_override_resolves_organization_user(self):
        permission = EmailPrincipalCompanyRight()
        principal = SimpleNamespace(email=self.admin.email, is_authenticated=True)
        view = make_view(pk=str(self.company.id))

        self.assertTrue(permission.has_permission(make_request(principal, 'DELETE'), view))

    def test_unresolved_principal_is_denied(self):
        permission = EmailPrincipalCompanyRight()
        principal = SimpleNamespace(email='nobody@example.com', is_authenticated=True)
        view = make_view(pk=str(self.company.id))

        self.assertFalse(permission.has_permission(make_request(principal, 'GET'), view))
