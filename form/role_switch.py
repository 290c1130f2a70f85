"""Role-Switch Controller - owns which applicant role is active."""

import logging
from typing import Any

from contracts import Role, parse_role
from registry import get_schema
from form.store import FormStore


logger = logging.getLogger(__name__)


class RoleSwitchController:
    """Two-state machine (expert <-> company) over a FormStore.

    Switching to a different role loads that role's schema into the
    store, which resets values, touched flags and errors. The attachment
    is schema-independent and survives the switch.
    """

    def __init__(self, store: FormStore):
        self.store = store

    @property
    def active_role(self) -> Role:
        return self.store.active_role

    def switch_to(self, role: Any) -> bool:
        """Activate a role.

        Args:
            role: Role or its identifier

        Returns:
            True if the role changed, False if it was already active

        Raises:
            InvalidRoleError: if the role is unknown
        """
        target = parse_role(role)
        if target == self.store.active_role:
            return False
        previous = self.store.active_role
        self.store.load_schema(get_schema(target))
        logger.info("Switched role %s -> %s", previous.value, target.value)
        return True
