from smart_account.account.security.authorization_gateway import AuthorizationGateway
from smart_account.account.security.relay_tokens import RelayAuthError, RelayClaims, RelayTokenVerifier
from smart_account.account.security.signature_validator import (
    EcdsaSignatureValidator,
    personal_message_digest,
    recover_signer,
)

__all__ = [
    "AuthorizationGateway",
    "EcdsaSignatureValidator",
    "RelayAuthError",
    "RelayClaims",
    "RelayTokenVerifier",
    "personal_message_digest",
    "recover_signer",
]
