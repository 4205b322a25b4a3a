"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import ClientFactory, ProjectFactory, ...
"""

from tests.factories.base import BaseFactory
from tests.factories.client import (
    ClientFactory,
    ClientInviteFactory,
    ClientMemberFactory,
    ProfileFactory,
)
from tests.factories.portal import InvoiceFactory, ProjectFactory, ProjectMessageFactory

__all__ = [
    "BaseFactory",
    "ClientFactory",
    "ClientInviteFactory",
    "ClientMemberFactory",
    "InvoiceFactory",
    "ProfileFactory",
    "ProjectFactory",
    "ProjectMessageFactory",
]
