"""
Secrets from HashiCorp Vault (KV v2, AppRole login).

The dashboard reads exactly two secrets: the PostgreSQL URL and the Valkey
URL. Both live under the `dashboard/` mount path; callers name only the part
after it. Missing configuration or a failed login raises VaultError, since
the app cannot start without its store URLs.
"""

import logging
import os
from typing import Dict

import hvac
from hvac.exceptions import Forbidden, InvalidPath, Unauthorized

logger = logging.getLogger(__name__)

_SECRET_PREFIX = "dashboard"

_vault_client_instance: "VaultClient | None" = None
_secret_cache: Dict[str, str] = {}


class VaultError(Exception):
    """Secrets unavailable. Fatal at startup."""


class VaultClient:
    """AppRole-authenticated reader for dashboard secrets."""

    def __init__(self, vault_addr: str | None = None, vault_namespace: str | None = None):
        self.vault_addr = vault_addr or os.getenv("VAULT_ADDR")
        self.vault_namespace = vault_namespace or os.getenv("VAULT_NAMESPACE")
        role_id = os.getenv("VAULT_ROLE_ID")
        secret_id = os.getenv("VAULT_SECRET_ID")

        if not self.vault_addr:
            raise VaultError("VAULT_ADDR environment variable is required")
        if not role_id or not secret_id:
            raise VaultError("VAULT_ROLE_ID and VAULT_SECRET_ID environment variables are required")

        options = {"url": self.vault_addr}
        if self.vault_namespace:
            options["namespace"] = self.vault_namespace
        self.client = hvac.Client(**options)

        self._login(role_id, secret_id)
        logger.info(f"Vault client ready ({self.vault_addr})")

    def _login(self, role_id: str, secret_id: str) -> None:
        try:
            response = self.client.auth.approle.login(role_id=role_id, secret_id=secret_id)
        except (Unauthorized, Forbidden) as e:
            raise VaultError(f"AppRole authentication failed: {e}") from e

        self.client.token = response["auth"]["client_token"]
        if not self.client.is_authenticated():
            raise VaultError("Vault authentication failed: token not accepted")

    def get_secret(self, path: str, field: str) -> str:
        """
        Read one field of the secret at dashboard/<path>.

        Raises:
            VaultError: The path is missing or not readable with this role.
            KeyError: The secret has no such field.
        """
        full_path = f"{_SECRET_PREFIX}/{path}"
        try:
            response = self.client.secrets.kv.v2.read_secret_version(
                path=full_path, raise_on_deleted_version=True
            )
        except InvalidPath as e:
            raise VaultError(f"Secret '{full_path}' not found in Vault") from e
        except (Unauthorized, Forbidden) as e:
            raise VaultError(f"Access denied to secret '{full_path}': {e}") from e

        data = response["data"]["data"]
        if field not in data:
            raise KeyError(f"Field '{field}' not found in secret '{full_path}'")
        return data[field]


def _cached_secret(path: str, field: str) -> str:
    """Read through a process-wide cache; the client is created on first use."""
    global _vault_client_instance
    key = f"{path}/{field}"
    if key not in _secret_cache:
        if _vault_client_instance is None:
            _vault_client_instance = VaultClient()
        _secret_cache[key] = _vault_client_instance.get_secret(path, field)
    return _secret_cache[key]


def get_database_url() -> str:
    return _cached_secret("database", "url")


def get_valkey_url() -> str:
    return _cached_secret("valkey", "url")
