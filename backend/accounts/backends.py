"""
Authentication backend for login by username, email or phone number.

Registered first in ``settings.AUTHENTICATION_BACKENDS``; the login
serializer calls ``authenticate(identifier=..., password=...)``.
"""

from __future__ import annotations

import re

from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend

from core.constants import PHONE_NUMBER_PATTERN

User = get_user_model()

_PHONE_RE = re.compile(PHONE_NUMBER_PATTERN)


def candidate_lookups(identifier: str) -> list[dict[str, str]]:
    """
    ORM lookups to try, in order, for a login identifier.

    The identifier's shape decides the primary field: ``@`` means email
    (case-insensitive), 10–14 digits means phone number.  Username is
    always tried last, so an all-digit username still works.
    """
    lookups = []
    if "@" in identifier:
        lookups.append({"email__iexact": identifier})
    elif _PHONE_RE.match(identifier):
        lookups.append({"phone_number": identifier})
    lookups.append({"username": identifier})
    return lookups


class MultiFieldAuthBackend(ModelBackend):
    """
    ``ModelBackend`` whose user lookup accepts any unique login field.
    Password check and the ``is_active`` gate are inherited.
    """

    def authenticate(self, request, identifier=None, password=None, **kwargs):
        if not identifier or password is None:
            return None

        user = self._find_user(identifier.strip())
        if user is None:
            # Run the hasher anyway so unknown identifiers cost the same time.
            User().set_password(password)
            return None

        if user.check_password(password) and self.user_can_authenticate(user):
            return user
        return None

    @staticmethod
    def _find_user(identifier: str):
        for lookup in candidate_lookups(identifier):
            user = User.objects.filter(**lookup).first()
            if user is not None:
                return user
        return None
