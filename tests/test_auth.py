"""
Tests for token handling and role checks
"""
from datetime import timedelta

import pytest
from fastapi import HTTPException

from app.init_db import create_initial_admin
from app.services.auth import (
    create_access_token,
    create_refresh_token,
    get_current_user,
    get_user_from_refresh_token,
    require_admin,
)


def test_access_token_resolves_user(db, booker):
    token = create_access_token({"sub": booker.email})

    assert get_current_user(token=token, db=db).id == booker.id


def test_refresh_token_is_not_an_access_token(db, booker):
    refresh_token = create_refresh_token({"sub": booker.email})

    with pytest.raises(HTTPException) as exc_info:
        get_current_user(token=refresh_token, db=db)
    assert exc_info.value.status_code == 401

    assert get_user_from_refresh_token(refresh_token, db).id == booker.id


def test_access_token_cannot_refresh(db, booker):
    access_token = create_access_token({"sub": booker.email})

    assert get_user_from_refresh_token(access_token, db) is None
    assert get_user_from_refresh_token("garbage", db) is None


def test_expired_token_is_rejected(db, booker):
    token = create_access_token({"sub": booker.email}, expires_delta=timedelta(minutes=-5))

    with pytest.raises(HTTPException):
        get_current_user(token=token, db=db)


def test_inactive_user_is_rejected(db, booker):
    booker.is_active = False
    db.commit()
    token = create_access_token({"sub": booker.email})

    with pytest.raises(HTTPException):
        get_current_user(token=token, db=db)


def test_require_admin(booker, admin):
    assert require_admin(current_user=admin) is admin

    with pytest.raises(HTTPException) as exc_info:
        require_admin(current_user=booker)
    assert exc_info.value.status_code == 403


def test_initial_admin_skipped_when_users_exist(db, booker, monkeypatch):
    monkeypatch.setenv("INITIAL_ADMIN_PASSWORD", "secret")

    assert create_initial_admin(db) is None


def test_initial_admin_needs_password(db, monkeypatch):
    monkeypatch.delenv("INITIAL_ADMIN_PASSWORD", raising=False)

    assert create_initial_admin(db) is None
