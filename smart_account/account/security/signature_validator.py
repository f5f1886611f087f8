import logging

from eth_keys import keys
from eth_keys.exceptions import BadSignature, ValidationError
from eth_utils import keccak

from smart_account.account.domain.validation_outcome import ValidationOutcome
from smart_account.account.interfaces.signature_validator import SignatureValidator
from smart_account.host.domain.address import normalize_address

logger = logging.getLogger(__name__)

PERSONAL_MESSAGE_PREFIX = b"\x19Ethereum Signed Message:\n32"
SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
SIGNATURE_LENGTH = 65
DIGEST_LENGTH = 32


def personal_message_digest(operation_digest: bytes) -> bytes:
    """
    The form of a 32-byte digest that wallets actually sign: prefix, length, digest, re-hashed.
    """
    if len(operation_digest) != DIGEST_LENGTH:
        raise ValueError(f"Operation digest must be {DIGEST_LENGTH} bytes, got {len(operation_digest)}")
    return keccak(PERSONAL_MESSAGE_PREFIX + bytes(operation_digest))


def recover_signer(message_hash: bytes, signature: bytes) -> str:
    """
    Recovers the signing address from a 65-byte r || s || v signature.
    Raises ValueError for malformed encodings, bad recovery ids and upper-half s values.
    """
    if len(signature) != SIGNATURE_LENGTH:
        raise ValueError(f"Signature must be {SIGNATURE_LENGTH} bytes, got {len(signature)}")
    r = int.from_bytes(signature[0:32], "big")
    s = int.from_bytes(signature[32:64], "big")
    v = signature[64]
    if v in (27, 28):
        v -= 27
    if v not in (0, 1):
        raise ValueError(f"Invalid recovery id: {signature[64]}")
    if not (0 < r < SECP256K1_N) or not (0 < s <= SECP256K1_N // 2):
        raise ValueError("Signature scalar out of range")
    try:
        public_key = keys.Signature(vrs=(v, r, s)).recover_public_key_from_msg_hash(message_hash)
    except (BadSignature, ValidationError) as exc:
        raise ValueError(f"Signature recovery failed: {exc}") from exc
    return public_key.to_checksum_address()


class EcdsaSignatureValidator(SignatureValidator):
    """
    Accepts an operation only when its personal-message digest was signed by the current owner.
    Malformed input is a rejection, never an exception.
    """

    def validate(self, operation_digest: bytes, signature: bytes, owner: str) -> ValidationOutcome:
        try:
            signer = recover_signer(personal_message_digest(operation_digest), signature)
        except ValueError as exc:
            logger.debug("Rejecting signature: %s", exc)
            return ValidationOutcome.rejected()
        if signer != normalize_address(owner):
            return ValidationOutcome.rejected()
        return ValidationOutcome.accepted()
