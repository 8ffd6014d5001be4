"""Capability-tagged caller context: player, curator, attester."""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from streak_quest.config import Settings, get_settings
from streak_quest.services.errors import Unauthorized

logger = logging.getLogger(__name__)

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


class Capability(str, Enum):
    player = "player"
    curator = "curator"
    attester = "attester"


@dataclass(frozen=True)
class CallerContext:
    address: str
    capabilities: frozenset[Capability]

    def has(self, capability: Capability) -> bool:
        return capability in self.capabilities


def normalize_address(value: str) -> str:
    """Validate a 0x-prefixed 20-byte hex address and lower-case it."""
    value = (value or "").strip()
    if not _ADDRESS_RE.match(value):
        raise ValueError(f"Invalid address: {value!r}")
    return value.lower()


def resolve_caller(address: str, settings: Optional[Settings] = None) -> CallerContext:
    """Every caller is a player; role lists in settings grant the rest."""
    settings = settings or get_settings()
    address = normalize_address(address)
    caps = {Capability.player}
    if address in settings.get_curator_addresses():
        caps.add(Capability.curator)
    if address in settings.get_attester_addresses():
        caps.add(Capability.attester)
    return CallerContext(address=address, capabilities=frozenset(caps))


def require_capability(caller: CallerContext, capability: Capability) -> None:
    if not caller.has(capability):
        logger.warning("Caller %s lacks %s capability", caller.address, capability.value)
        raise Unauthorized(f"{capability.value} capability required")
