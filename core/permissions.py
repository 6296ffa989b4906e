"""
Base permission classes for the application.
"""

import uuid
from rest_framework.permissions import BasePermission

from core.exceptions import InvalidArgumentException


class AccessRightPermission(BasePermission):
    """
    Grants a request when the access engine allows the acting user the right
    mapped from the request method on the object named in the URL.

    Subclasses set `rights` (the right enumeration), `method_rights` and
    implement `check`. A view may pin a single right by defining the attribute
    named by `view_right_attribute`.

    The acting user comes from `get_acting_user`. By default it is
    `request.user` when the authentication class already produced an
    organization `User`; projects authenticating another principal override
    it to resolve the matching organization user.
    """

    rights = None
    method_rights = {}
    view_right_attribute = None
    lookup_url_kwarg = 'pk'

    def has_permission(self, request, view):
        # Imported here so core stays importable before apps are loaded
        from apps.access.services import AccessService

        user = self.get_acting_user(request)
        if user is None:
            return False

        right = self.get_right(request, view)
        if right is None:
            return False

        target_id = self.get_target_id(view)
        return self.check(AccessService(), user, target_id, right)

    def get_acting_user(self, request):
        from apps.organization.models import User

        user = getattr(request, 'user', None)
        return user if isinstance(user, User) else None

    def get_right(self, request, view):
        if self.view_right_attribute:
            right = getattr(view, self.view_right_attribute, None)
            if isinstance(right, str):
                try:
                    return self.rights[right.upper()]
                except KeyError:
                    raise InvalidArgumentException(f"Unknown {self.rights.__name__}: {right}")
            if right is not None:
                return right
        return self.method_rights.get(request.method)

    def get_target_id(self, view):
        value = getattr(view, 'kwargs', {}).get(self.lookup_url_kwarg)
        if value is None:
            return None
        try:
            return uuid.UUID(str(value))
        except ValueError:
            raise InvalidArgumentException(f"Malformed identifier: {value}")

    def check(self, engine, user, target_id, right):
        raise NotImplementedError('Subclasses must implement check()')
