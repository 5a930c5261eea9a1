import pytest

from models import User
from services import PasswordHasher, TokenConfig, TokenService, UserService
from services.exceptions import (
    DuplicateAccountError,
    HashFormatError,
    HashingError,
    InvalidCredentialsError,
)


@pytest.fixture()
def tokens():
    return TokenService(TokenConfig(secret_key="test-secret-key"))


@pytest.fixture()
def users(db_session, tokens):
    return UserService(db_session, PasswordHasher(rounds=4), tokens)


def test_signup_stores_hash_and_returns_token(users, db_session, tokens):
    result = users.signup(name="alice", email="a@x.com", password="s3cret!")

    stored = db_session.query(User).filter(User.id == result.user_id).one()
    assert stored.password != "s3cret!"
    assert result.email == "a@x.com"
    assert tokens.verify(result.token) == result.user_id
    assert users.place_ids(result.user_id) == set()


def test_signup_with_taken_email_fails(users):
    users.signup(name="alice", email="a@x.com", password="s3cret!")

    with pytest.raises(DuplicateAccountError):
        users.signup(name="alice again", email="a@x.com", password="other1")


def test_login_returns_token_for_valid_credentials(users, tokens):
    created = users.signup(name="alice", email="a@x.com", password="s3cret!")

    result = users.login("a@x.com", "s3cret!")

    assert result.user_id == created.user_id
    assert tokens.verify(result.token) == created.user_id


def test_login_failures_look_the_same(users):
    users.signup(name="alice", email="a@x.com", password="s3cret!")

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        users.login("a@x.com", "wrong!")
    with pytest.raises(InvalidCredentialsError) as unknown_email:
        users.login("nobody@x.com", "s3cret!")

    assert wrong_password.value.message == unknown_email.value.message


def test_login_with_corrupt_stored_hash_raises(users, db_session):
    db_session.add(User(name="legacy", email="old@x.com", password="plaintext"))
    db_session.commit()

    with pytest.raises(HashFormatError):
        users.login("old@x.com", "plaintext")


def test_list_users(users):
    users.signup(name="alice", email="a@x.com", password="s3cret!")
    users.signup(name="bob", email="b@x.com", password="s3cret!")

    assert [u.name for u in users.list_users()] == ["alice", "bob"]


def test_signup_hashing_failure_persists_nothing(users, db_session, monkeypatch):
    def broken_hash(plain):
        raise HashingError()

    monkeypatch.setattr(users.hasher, "hash", broken_hash)

    with pytest.raises(HashingError):
        users.signup(name="alice", email="a@x.com", password="s3cret!")

    assert db_session.query(User).count() == 0


def test_login_with_unknown_email_still_runs_bcrypt(users, monkeypatch):
    calls = []
    monkeypatch.setattr(users.hasher, "dummy_verify", lambda: calls.append("dummy"))

    with pytest.raises(InvalidCredentialsError):
        users.login("nobody@x.com", "s3cret!")

    assert calls == ["dummy"]
