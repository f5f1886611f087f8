import pytest

from smart_account.account.domain.account_errors import NotFromOperator, NotFromOperatorOrOwner, NotOwner
from smart_account.account.security.authorization_gateway import AuthorizationGateway
from smart_account.host.domain.address import ZERO_ADDRESS


@pytest.fixture
def gateway(operator, ownership_store):
    return AuthorizationGateway(operator.address, ownership_store)


def test_operator_passes_both_guards(gateway, operator):
    gateway.require_operator(operator.address)
    gateway.require_operator_or_owner(operator.address)


def test_owner_passes_operator_or_owner_only(gateway, owner):
    gateway.require_operator_or_owner(owner.address)
    with pytest.raises(NotFromOperator):
        gateway.require_operator(owner.address)


def test_stranger_fails_every_guard(gateway, stranger):
    with pytest.raises(NotFromOperator):
        gateway.require_operator(stranger.address)
    with pytest.raises(NotFromOperatorOrOwner):
        gateway.require_operator_or_owner(stranger.address)
    with pytest.raises(NotOwner):
        gateway.require_owner(stranger.address)


def test_guards_follow_ownership_store(gateway, ownership_store, owner, stranger):
    ownership_store.set_owner(stranger.address)

    gateway.require_operator_or_owner(stranger.address)
    with pytest.raises(NotFromOperatorOrOwner):
        gateway.require_operator_or_owner(owner.address)


def test_caller_comparison_ignores_case(gateway, operator):
    gateway.require_operator(operator.address.lower())


def test_zero_address_is_never_the_owner(gateway, ownership_store):
    ownership_store.set_owner(ZERO_ADDRESS)

    assert not gateway.is_owner(ZERO_ADDRESS)
    with pytest.raises(NotFromOperatorOrOwner):
        gateway.require_operator_or_owner(ZERO_ADDRESS)
    with pytest.raises(NotOwner):
        gateway.require_owner(ZERO_ADDRESS)


@pytest.mark.parametrize("caller", ["not-an-address", "", "0x1234"])
def test_unparseable_caller_fails_with_authorization_error(gateway, caller):
    with pytest.raises(NotFromOperator):
        gateway.require_operator(caller)
    with pytest.raises(NotFromOperatorOrOwner):
        gateway.require_operator_or_owner(caller)
    with pytest.raises(NotOwner):
        gateway.require_owner(caller)
