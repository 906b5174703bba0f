"""Authentication: tenant discovery, login and logout."""

from terra_client.features.auth.client import AuthAPI
from terra_client.features.auth.schemas import DiscoveryResult, LoginResult, TenantInfo, UserProfile

__all__ = ["AuthAPI", "DiscoveryResult", "LoginResult", "TenantInfo", "UserProfile"]
