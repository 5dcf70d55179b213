"""Credential registry: per-tenant Travel Compositor credentials from the environment.

Slot 1 reads TRAVEL_COMPOSITOR_USERNAME / _PASSWORD / _MICROSITE_ID;
slot N (N >= 2) reads the same names with an "_N" suffix. A slot is
available only when all three values are present and non-empty.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from pydantic import SecretStr

from roadbook.core.constants import ENV_MICROSITE_ID, ENV_PASSWORD, ENV_USERNAME
from roadbook.domain.entities import TenantConfig
from roadbook.domain.exceptions import ConfigurationError


def slot_env_names(config_id: int) -> tuple[str, str, str]:
    """Return the (username, password, microsite id) env names for a slot."""
    suffix = "" if config_id == 1 else f"_{config_id}"
    return (
        f"{ENV_USERNAME}{suffix}",
        f"{ENV_PASSWORD}{suffix}",
        f"{ENV_MICROSITE_ID}{suffix}",
    )


class CredentialRegistry:
    """Immutable snapshot of tenant credential slots 1..max_slots.

    The environment is read once at construction; later changes to
    os.environ are not observed.
    """

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        max_slots: int = 4,
    ) -> None:
        source = os.environ if environ is None else environ
        self._max_slots = max_slots
        self._configs: dict[int, TenantConfig] = {}
        self._missing: dict[int, list[str]] = {}
        for config_id in range(1, max_slots + 1):
            names = slot_env_names(config_id)
            values = [(source.get(name) or "").strip() for name in names]
            missing = [name for name, value in zip(names, values) if not value]
            if missing:
                self._missing[config_id] = missing
                continue
            username, password, microsite_id = values
            self._configs[config_id] = TenantConfig(
                config_id=config_id,
                microsite_id=microsite_id,
                username=username,
                password=SecretStr(password),
            )

    @property
    def max_slots(self) -> int:
        return self._max_slots

    def get_config(self, config_id: int) -> TenantConfig:
        """Return the credentials for a slot.

        Raises:
            ConfigurationError: If the slot is out of range or incomplete.
        """
        config = self._configs.get(config_id)
        if config is None:
            raise ConfigurationError(config_id, self._missing.get(config_id, []))
        return config

    def list_available_configs(self) -> list[int]:
        """Return every complete slot number, in ascending order."""
        return sorted(self._configs)

    def describe(self) -> list[dict[str, Any]]:
        """Per-slot status for diagnostics; never includes secrets."""
        slots: list[dict[str, Any]] = []
        for config_id in range(1, self._max_slots + 1):
            config = self._configs.get(config_id)
            if config is not None:
                slots.append({
                    "config_id": config_id,
                    "configured": True,
                    "microsite_id": config.microsite_id,
                    "username": config.masked_username,
                    "missing": [],
                })
            else:
                slots.append({
                    "config_id": config_id,
                    "configured": False,
                    "microsite_id": None,
                    "username": None,
                    "missing": self._missing.get(config_id, []),
                })
        return slots
