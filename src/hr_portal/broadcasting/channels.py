from __future__ import annotations

from ..core.constants import ADMIN_EXTRACTION_CHANNEL
from ..core.enums import Role
from ..users.service import AuthService
from .broadcaster import Broadcaster


def register_channels(broadcaster: Broadcaster, auth: AuthService) -> None:
    broadcaster.channel(ADMIN_EXTRACTION_CHANNEL, lambda user_id: auth.resolve_role(user_id) == Role.ADMIN)
