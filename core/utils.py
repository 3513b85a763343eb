"""
Core utilities: center scoping.
"""
from django.conf import settings


def center_scope_for(user):
    """
    Center id the user's queries are restricted to.
    None (unrestricted) in single-tenant mode or when the user has no center.
    """
    if getattr(settings, 'SINGLE_TENANT', False):
        return None
    return getattr(user, 'center_id', None)
