import uuid
from django.db import models
from django.core.exceptions import ValidationError
from django.utils.translation import gettext_lazy as _


class Company(models.Model):
    """Tenant company. Disabling a company is its soft delete."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    enabled = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = 'organization'
        db_table = 'companies'
        ordering = ['name']

    def __str__(self):
        return self.name


class User(models.Model):
    """Platform user, optionally affiliated with a single company"""

    ADMIN = 'Admin'
    MANAGER = 'Manager'
    EMPLOYEE = 'Employee'

    ROLE_CHOICES = [
        (ADMIN, 'Admin'),
        (MANAGER, 'Manager'),
        (EMPLOYEE, 'Employee'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    full_name = models.CharField(max_length=200, blank=True)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=EMPLOYEE)
    company = models.ForeignKey(
        Company,
        null=True,
        blank=True,
        on_delete=models.PROTECT,
        related_name='users'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = 'organization'
        db_table = 'users'

    def __str__(self):
        return f"{self.full_name or self.email} ({self.role})"


class Department(models.Model):
    """Department of a company with an optional owner"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    company = models.ForeignKey(Company, on_delete=models.PROTECT, related_name='departments')
    owner = models.ForeignKey(
        User,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name='owned_departments'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = 'organization'
        db_table = 'departments'
        unique_together = ['company', 'name']

    def __str__(self):
        return f"{self.name} - {self.company_id}"

    def clean(self):
        if self.owner_id and self.owner.company_id != self.company_id:
            raise ValidationError(_('Department owner must belong to the department company'))


class ManagerRelation(models.Model):
    """Reporting line: `manager` directly manages `subordinate`"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    manager = models.ForeignKey(User, on_delete=models.CASCADE, related_name='subordinate_relations')
    subordinate = models.ForeignKey(User, on_delete=models.CASCADE, related_name='manager_relations')

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        app_label = 'organization'
        db_table = 'manager_relations'
        unique_together = ['manager', 'subordinate']

    def __str__(self):
        return f"{self.manager_id} -> {self.subordinate_id}"

    def clean(self):
        if self.manager_id and self.manager_id == self.subordinate_id:
            raise ValidationError(_('A user cannot manage themselves'))
