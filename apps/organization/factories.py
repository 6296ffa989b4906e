"""
Factory classes for organization models using Factory Boy and Faker.
"""

import factory
from faker import Faker

from .models import Company, User, Department, ManagerRelation

fake = Faker()


class CompanyFactory(factory.django.DjangoModelFactory):
    """Factory for Company model."""

    class Meta:
        model = Company

    name = factory.LazyFunction(lambda: fake.company())
    enabled = True


class UserFactory(factory.django.DjangoModelFactory):
    """Factory for User model."""

    class Meta:
        model = User

    email = factory.Sequence(lambda n: f"user{n}@{fake.domain_name()}")
    full_name = factory.LazyFunction(lambda: fake.name())
    role = User.EMPLOYEE
    company = factory.SubFactory(CompanyFactory)


class DepartmentFactory(factory.django.DjangoModelFactory):
    """Factory for Department model."""

    class Meta:
        model = Department

    name = factory.Sequence(lambda n: f"{fake.job()[:150]} {n}")
    company = factory.SubFactory(CompanyFactory)
    owner = None


class ManagerRelationFactory(factory.django.DjangoModelFactory):
    """Factory for ManagerRelation model."""

    class Meta:
        model = ManagerRelation

    manager = factory.SubFactory(UserFactory, role=User.MANAGER)
    subordinate = factory.SubFactory(UserFactory, company=factory.SelfAttribute('..manager.company'))
