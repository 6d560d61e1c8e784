"""Tests for AuthDatabase - users table access."""

import pytest

from auth.database import AuthDatabase


@pytest.fixture
def auth_db(db):
    return AuthDatabase(db)


def user_row(user_id, **overrides):
    row = {"id": user_id, "name": "User", "email": "user@nextmail.com", "is_active": True}
    row.update(overrides)
    return row


class TestGetUserByEmail:

    def test_returns_stored_user(self, auth_db, db, test_user_id):
        db.execute_single.return_value = user_row(test_user_id, password_hash="pbkdf2_sha256$1$00$00")

        user = auth_db.get_user_by_email("User@NextMail.com")

        assert user.id == test_user_id
        assert user.password_hash == "pbkdf2_sha256$1$00$00"

    def test_lookup_is_case_insensitive(self, auth_db, db):
        auth_db.get_user_by_email("User@NextMail.com")

        sql, params = db.execute_single.call_args.args
        assert "lower(%s)" in sql
        assert params == ("User@NextMail.com",)

    def test_unknown_email(self, auth_db):
        assert auth_db.get_user_by_email("nobody@nextmail.com") is None


class TestGetUserById:

    def test_found(self, auth_db, db, test_user_id):
        db.execute_single.return_value = user_row(test_user_id)

        assert auth_db.get_user_by_id(test_user_id).email == "user@nextmail.com"

    def test_not_found(self, auth_db, test_user_id):
        assert auth_db.get_user_by_id(test_user_id) is None


class TestCreateUser:

    def test_inserts_and_returns_user(self, auth_db, db, test_user_id):
        db.execute_returning.return_value = [user_row(test_user_id)]

        user = auth_db.create_user("User", "User@NextMail.com", "hash")

        assert user.id == test_user_id
        assert db.execute_returning.call_args.args[1] == ("User", "User@NextMail.com", "hash")
