"""
In-memory organization state for access engine tests.
"""

import uuid
from django.test import SimpleTestCase

from apps.access.services import AccessService
from apps.organization.models import Company, User, Department


class StubDirectory:
    """Resolves entities by identifier from a fixed set."""

    def __init__(self, *entities):
        self.entities = {str(entity.id): entity for entity in entities}
        self.lookups = []

    def find(self, entity_id):
        self.lookups.append(entity_id)
        return self.entities.get(str(entity_id))


class StubRelations:
    """Reporting lines given as (manager, subordinate) pairs, already transitive."""

    def __init__(self, *pairs):
        self.pairs = {(str(manager.id), str(subordinate.id)) for manager, subordinate in pairs}

    def is_manager(self, manager, subordinate):
        return (str(manager.id), str(subordinate.id)) in self.pairs


def make_company(enabled=True, name='Acme'):
    return Company(id=uuid.uuid4(), name=name, enabled=enabled)


def make_user(role=User.EMPLOYEE, company=None):
    user_id = uuid.uuid4()
    return User(id=user_id, email=f"{user_id.hex}@example.com", role=role, company=company)


def make_department(company, owner=None, name='Engineering'):
    return Department(id=uuid.uuid4(), name=name, company=company, owner=owner)


class AccessServiceTestCase(SimpleTestCase):
    """Builds an engine over stub collaborators; no database access."""

    def setUp(self):
        super().setUp()
        self.company = make_company(name='Acme')
        self.other_company = make_company(name='Globex')
        self.disabled_company = make_company(enabled=False, name='Initech')

        self.admin = make_user(User.ADMIN, self.company)
        self.manager = make_user(User.MANAGER, self.company)
        self.employee = make_user(User.EMPLOYEE, self.company)
        self.outsider = make_user(User.EMPLOYEE, self.other_company)
        self.unaffiliated = make_user(User.EMPLOYEE)

    def build_engine(self, users=(), departments=(), relations=()):
        self.users = StubDirectory(
            self.admin, self.manager, self.employee, self.outsider, self.unaffiliated, *users
        )
        self.departments = StubDirectory(*departments)
        self.relations = StubRelations(*relations)
        return AccessService(
            user_service=self.users,
            department_service=self.departments,
            relation_service=self.relations,
        )
