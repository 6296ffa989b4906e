"""
Lookup and maintenance services for companies, users, departments and
reporting lines.
"""

import logging
from collections import deque
from django.core.exceptions import ValidationError
from django.db import transaction

from core.exceptions import NotFoundException, InvalidArgumentException
from core.logging import log_model_change
from .models import Company, User, Department, ManagerRelation

logger = logging.getLogger(__name__)


class UserService:
    """Resolves users by identifier."""

    @staticmethod
    def find(user_id):
        """Return the user with its company preloaded, or None."""
        return User.objects.select_related('company').filter(pk=user_id).first()


class DepartmentService:
    """Resolves departments by identifier."""

    @staticmethod
    def find(department_id):
        """Return the department with company and owner preloaded, or None."""
        return (
            Department.objects
            .select_related('company', 'owner', 'owner__company')
            .filter(pk=department_id)
            .first()
        )


class RelationService:
    """Answers queries about the manager hierarchy."""

    @staticmethod
    def is_manager(manager, subordinate):
        """
        Check whether `manager` transitively manages `subordinate`.

        Walks the reporting lines upward from the subordinate, one level of
        direct managers per query, until the manager is found or the chain
        runs out. Users already visited are skipped so cyclic data terminates.

        Args:
            manager: User expected higher in the hierarchy
            subordinate: User expected lower in the hierarchy

        Returns:
            bool: True if a chain of reporting lines connects them
        """
        target_id = manager.id
        visited = {subordinate.id}
        frontier = deque([subordinate.id])

        while frontier:
            current_id = frontier.popleft()
            direct_managers = ManagerRelation.objects.filter(
                subordinate_id=current_id
            ).values_list('manager_id', flat=True)

            for manager_id in direct_managers:
                if manager_id == target_id:
                    return True
                if manager_id not in visited:
                    visited.add(manager_id)
                    frontier.append(manager_id)

        return False


class CompanyService:
    """Service for creating, renaming and disabling companies."""

    @staticmethod
    def get(company_id):
        try:
            return Company.objects.get(pk=company_id)
        except ValidationError:
            raise InvalidArgumentException(f"Malformed company id: {company_id}")
        except Company.DoesNotExist:
            logger.warning(f"Company {company_id} not found")
            raise NotFoundException(f"Can't find company with id: {company_id}")

    @staticmethod
    def create(name, creator):
        """
        Create an enabled company and make the creator its member.

        Args:
            name: Company name
            creator: User founding the company

        Returns:
            Company: the created company
        """
        with transaction.atomic():
            company = Company.objects.create(name=name)
            creator.company = company
            creator.save(update_fields=['company', 'updated_at'])

        log_model_change(logger, 'Company', company.id, 'create', user=creator)
        return company

    @staticmethod
    def delete(company_id):
        """Soft delete: the company stays in place but is disabled."""
        company = CompanyService.get(company_id)
        company.enabled = False
        company.save(update_fields=['enabled', 'updated_at'])

        log_model_change(logger, 'Company', company.id, 'disable')

    @staticmethod
    def update(company_id, name=None):
        """Rename a company. A blank name leaves it unchanged."""
        company = CompanyService.get(company_id)

        if name and name.strip():
            company.name = name
            company.save(update_fields=['name', 'updated_at'])
            log_model_change(logger, 'Company', company.id, 'update')

        return company
