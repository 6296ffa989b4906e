"""
Actions that can be authorized, one enumeration per resource category.
"""

from enum import Enum


class CompanyRight(Enum):
    VIEW = 'view'
    EDIT = 'edit'
    REMOVE = 'remove'
    CREATE = 'create'


class UserRight(Enum):
    VIEW = 'view'
    GET_STATUS = 'get_status'
    EDIT = 'edit'
    REMOVE = 'remove'
    CREATE = 'create'
    SET_STATUS = 'set_status'


class DepartmentRight(Enum):
    VIEW = 'view'
    EDIT = 'edit'
    REMOVE = 'remove'
    CREATE = 'create'
    ASSIGN = 'assign'
    ADD_PARTICIPANT = 'add_participant'


class WorkDayRight(Enum):
    VIEW = 'view'
    ADD_TIME = 'add_time'
    SUBTRACT_TIME = 'subtract_time'
