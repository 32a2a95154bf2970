import pytest
from jose import jwt

from salon.auth import ROLE_CAPABILITIES, Actor, Capability, actor_from_claims
from salon.config import JWT_ALGORITHM, SECRET_KEY
from salon.errors import AuthenticationError
from salon.models import Role
from salon.security_utils import create_access_token, decode_access_token, hash_password, verify_password


def test_every_role_has_capabilities():
    assert set(ROLE_CAPABILITIES) == set(Role)


def test_capabilities_per_role():
    assert Actor(7, Role.MANICURIST).can(Capability.RECORD_OWN_WORK)
    assert not Actor(20, Role.CLIENT).can(Capability.RECORD_OWN_WORK)
    assert not Actor(7, Role.MANICURIST).can(Capability.BOOK_OWN_APPOINTMENT)
    assert Actor(1, Role.ADMIN).can(Capability.MANAGE_USERS)
    assert all(Actor(u, r).can(Capability.CANCEL_APPOINTMENT) for u, r in [(1, Role.ADMIN), (7, Role.MANICURIST), (20, Role.CLIENT)])


def test_token_round_trip_identifies_actor():
    claims = decode_access_token(create_access_token(7, Role.MANICURIST.value))
    actor = actor_from_claims(claims)
    assert actor == Actor(user_id=7, role=Role.MANICURIST)
    assert not actor.is_admin


def test_unknown_role_in_token_rejected():
    claims = decode_access_token(create_access_token(7, 42))
    with pytest.raises(AuthenticationError):
        actor_from_claims(claims)


def test_token_without_identity_rejected():
    token = jwt.encode({"sub": "someone"}, SECRET_KEY, algorithm=JWT_ALGORITHM)
    with pytest.raises(AuthenticationError):
        actor_from_claims(decode_access_token(token))


def test_token_signed_with_other_key_rejected():
    token = jwt.encode({"user_id": 1, "role_id": 1}, "someone-else", algorithm=JWT_ALGORITHM)
    with pytest.raises(AuthenticationError) as exc_info:
        decode_access_token(token)
    assert exc_info.value.code == "INVALID_TOKEN"


def test_password_hashing():
    hashed = hash_password("manicure-2024")
    assert hashed != "manicure-2024"
    assert verify_password("manicure-2024", hashed)
    assert not verify_password("other", hashed)
    assert not verify_password("anything", "!")
