"""Typed identifiers for gatekeeper entities.

Invite ids are opaque strings: records written by older deployments use a
different id scheme, so no format is enforced when reading.
"""

from typing import NewType

InviteId = NewType("InviteId", str)
