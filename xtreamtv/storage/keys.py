"""
Storage key layout.

Catalog caches, their owning account and session state live under fixed
keys derived from a configurable prefix. User-scoped keys are built from
a (namespace, user_id, resource) triple; user ids are percent-encoded so
that separators inside usernames cannot collide with the layout.
"""

from enum import Enum
from urllib.parse import quote

DEFAULT_PREFIX = "huluxtream"


class UserResource(str, Enum):
    """Per-user persisted resources removed on logout."""
    FAVORITES = "favorites"
    PARENTAL_CONTROL_ENABLED = "parental_control_enabled"
    PARENTAL_CONTROL_PIN = "parental_control_pin"
    RESTRICTED_CATEGORIES = "restricted_categories"


def user_key(namespace: str, user_id: str, resource: UserResource | str) -> str:
    """Build a user-scoped key, e.g. ``huluxtream:user:bob%3Aadmin:favorites``."""
    if not user_id:
        raise ValueError("user_id must not be empty")
    resource_name = resource.value if isinstance(resource, UserResource) else resource
    return f"{namespace}:user:{quote(user_id, safe='')}:{resource_name}"


class StorageKeys:
    """Key names for one key prefix."""

    def __init__(self, prefix: str = DEFAULT_PREFIX):
        self.prefix = prefix

    @property
    def auth(self) -> str:
        return f"{self.prefix}_auth"

    @property
    def saved_users(self) -> str:
        return f"{self.prefix}_saved_users"

    @property
    def cache_owner(self) -> str:
        """Account the persisted catalog caches were fetched for."""
        return f"{self.prefix}_cache_owner"

    def catalog(self, catalog_name: str) -> str:
        """Fixed key for a catalog cache slot (``<prefix>_<name>_cache``)."""
        return f"{self.prefix}_{catalog_name}_cache"

    def user(self, user_id: str, resource: UserResource | str) -> str:
        return user_key(self.prefix, user_id, resource)

    def user_keys(self, user_id: str) -> list[str]:
        """All user-scoped keys cleared on logout."""
        return [self.user(user_id, resource) for resource in UserResource]
