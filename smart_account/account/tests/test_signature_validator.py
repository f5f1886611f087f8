import pytest
from eth_keys import keys
from eth_utils import keccak

from smart_account.account.domain.validation_outcome import ValidationStatus
from smart_account.account.security.signature_validator import (
    SECP256K1_N,
    EcdsaSignatureValidator,
    personal_message_digest,
    recover_signer,
)


@pytest.fixture
def validator():
    return EcdsaSignatureValidator()


def test_personal_message_digest_wraps_prefix_and_length(digest):
    expected = keccak(b"\x19Ethereum Signed Message:\n32" + digest)
    assert personal_message_digest(digest) == expected


def test_personal_message_digest_requires_32_bytes():
    with pytest.raises(ValueError):
        personal_message_digest(b"\x01" * 31)


def test_owner_signature_is_accepted(validator, owner, digest, sign):
    signature = sign(owner.key, digest)

    outcome = validator.validate(digest, signature, owner.address)

    assert outcome.status == ValidationStatus.ACCEPTED
    assert outcome.pack() == 0


def test_signature_from_another_key_is_rejected(validator, owner, stranger, digest, sign):
    signature = sign(stranger.key, digest)

    outcome = validator.validate(digest, signature, owner.address)

    assert outcome.status == ValidationStatus.REJECTED
    assert outcome.pack() == 1


def test_same_signature_rejected_after_owner_changes(validator, owner, stranger, digest, sign):
    signature = sign(owner.key, digest)

    assert validator.validate(digest, signature, owner.address).is_accepted
    assert not validator.validate(digest, signature, stranger.address).is_accepted


def test_signature_over_raw_digest_is_rejected(validator, owner, digest):
    # Signed without the personal-message wrapping.
    raw = keys.PrivateKey(bytes(owner.key)).sign_msg_hash(digest).to_bytes()

    outcome = validator.validate(digest, raw, owner.address)

    assert outcome.status == ValidationStatus.REJECTED


def test_validation_is_deterministic(validator, owner, digest, sign):
    signature = sign(owner.key, digest)

    first = validator.validate(digest, signature, owner.address)
    second = validator.validate(digest, signature, owner.address)

    assert first == second


@pytest.mark.parametrize("length", [0, 64, 66])
def test_wrong_length_signature_is_rejected(validator, owner, digest, length):
    outcome = validator.validate(digest, b"\x01" * length, owner.address)
    assert outcome.status == ValidationStatus.REJECTED


def test_invalid_recovery_id_is_rejected(validator, owner, digest, sign):
    signature = bytearray(sign(owner.key, digest))
    signature[64] = 29

    outcome = validator.validate(digest, bytes(signature), owner.address)

    assert outcome.status == ValidationStatus.REJECTED


def test_zero_one_recovery_id_is_normalised(owner, digest, sign):
    signature = bytearray(sign(owner.key, digest))
    signature[64] -= 27

    assert recover_signer(personal_message_digest(digest), bytes(signature)) == owner.address


def test_upper_half_s_is_rejected(validator, owner, digest, sign):
    signature = sign(owner.key, digest)
    r = signature[0:32]
    s = int.from_bytes(signature[32:64], "big")
    v = signature[64]
    flipped = r + (SECP256K1_N - s).to_bytes(32, "big") + bytes([55 - v])

    outcome = validator.validate(digest, flipped, owner.address)

    assert outcome.status == ValidationStatus.REJECTED


def test_zero_scalars_are_rejected(validator, owner, digest):
    outcome = validator.validate(digest, b"\x00" * 64 + b"\x1b", owner.address)
    assert outcome.status == ValidationStatus.REJECTED


def test_short_digest_is_rejected(validator, owner, digest, sign):
    signature = sign(owner.key, digest)
    outcome = validator.validate(digest[:16], signature, owner.address)
    assert outcome.status == ValidationStatus.REJECTED
