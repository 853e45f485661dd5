"""
Row-level authorization for the profile, incident report and distress
notification stores.

Every read or write is admitted by a predicate chosen from ``POLICIES`` by
(table, operation). A request passes when any predicate for that pair passes;
a pair with no predicates (for example any ``delete``) is always denied.

The caller's role is looked up from the profile store on every check. Role
values carried on the caller object are never trusted.

Surveillance video blobs are covered too, keyed on the uploader id.
"""
import logging
from collections.abc import Mapping

from .models import Profile

logger = logging.getLogger(__name__)

# Tables
PROFILES = 'profiles'
INCIDENT_REPORTS = 'incident_reports'
DISTRESS_NOTIFICATIONS = 'distress_notifications'
SURVEILLANCE_VIDEOS = 'surveillance_videos'

# Operations
SELECT = 'select'
INSERT = 'insert'
UPDATE = 'update'
DELETE = 'delete'

# Column holding the owning principal id for each table
OWNER_COLUMNS = {
    PROFILES: 'user_id',
    INCIDENT_REPORTS: 'reporter_id',
    DISTRESS_NOTIFICATIONS: 'user_id',
    SURVEILLANCE_VIDEOS: 'owner_id',
}


class PolicyViolation(Exception):
    def __init__(self, table, operation):
        self.table = table
        self.operation = operation
        super().__init__(f"{operation} on {table} denied")


def get_user_role(user_id):
    """Return the stored role for ``user_id``, or None when it has no profile."""
    if user_id is None:
        return None
    return Profile.objects.filter(user_id=user_id).values_list('role', flat=True).first()


def _column(row, name):
    if isinstance(row, Mapping):
        return row.get(name)
    return getattr(row, name, None)


def _same_principal(left, right):
    if left is None or right is None:
        return False
    return str(left) == str(right)


def is_owner(caller, table, row):
    return _same_principal(caller.pk, _column(row, OWNER_COLUMNS[table]))


def is_officer(caller, table, row):
    return get_user_role(caller.pk) == Profile.ROLE_OFFICER


POLICIES = {
    (PROFILES, SELECT): (is_owner, is_officer),
    (PROFILES, UPDATE): (is_owner,),
    (PROFILES, INSERT): (is_owner,),

    (INCIDENT_REPORTS, SELECT): (is_owner, is_officer),
    (INCIDENT_REPORTS, INSERT): (is_owner,),
    (INCIDENT_REPORTS, UPDATE): (is_officer,),

    (DISTRESS_NOTIFICATIONS, SELECT): (is_owner, is_officer),
    (DISTRESS_NOTIFICATIONS, INSERT): (is_officer,),
    (DISTRESS_NOTIFICATIONS, UPDATE): (is_owner,),

    # Video blobs live under a folder named after the uploader
    (SURVEILLANCE_VIDEOS, SELECT): (is_owner, is_officer),
    (SURVEILLANCE_VIDEOS, INSERT): (is_owner,),
}


def is_authenticated(caller):
    return caller is not None and getattr(caller, 'is_authenticated', False)


def is_allowed(caller, table, operation, row):
    """Evaluate the policy for one row.

    ``row`` is the stored row for select/update/delete and the proposed row
    for insert. It may be a model instance or a mapping of column values.
    """
    if table not in OWNER_COLUMNS:
        raise ValueError(f"Unknown table: {table}")

    if not is_authenticated(caller):
        return False

    predicates = POLICIES.get((table, operation), ())
    return any(predicate(caller, table, row) for predicate in predicates)


def enforce(caller, table, operation, row):
    if not is_allowed(caller, table, operation, row):
        logger.warning(f"Denied {operation} on {table} for {getattr(caller, 'pk', None)}")
        raise PolicyViolation(table, operation)


def filter_visible(caller, table, queryset):
    """Restrict ``queryset`` to the rows ``caller`` may select.

    Rows the caller may not read are filtered out rather than reported as an
    error.
    """
    if table not in OWNER_COLUMNS:
        raise ValueError(f"Unknown table: {table}")

    if not is_authenticated(caller):
        return queryset.none()

    predicates = POLICIES.get((table, SELECT), ())
    if is_officer in predicates and is_officer(caller, table, None):
        return queryset
    if is_owner in predicates:
        return queryset.filter(**{OWNER_COLUMNS[table]: caller.pk})
    return queryset.none()
