"""HTTP access to the CRM backend."""

from terra_client.infra.http.client import AuthenticatedClient, RequestCall
from terra_client.infra.http.envelope import ApiResult, ErrorBody, Failure, Success, decode_envelope, unwrap
from terra_client.infra.http.refresh import TokenPair, TokenRefresher
from terra_client.infra.http.session import Credentials, SessionStore, normalize_tenant_id

__all__ = [
    "ApiResult",
    "AuthenticatedClient",
    "Credentials",
    "ErrorBody",
    "Failure",
    "RequestCall",
    "SessionStore",
    "Success",
    "TokenPair",
    "TokenRefresher",
    "decode_envelope",
    "normalize_tenant_id",
    "unwrap",
]
