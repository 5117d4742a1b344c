# tests/test_models.py

from datetime import datetime

import pytest
from pydantic import ValidationError

from core.config import settings
from core.config_validator import validate_config_on_startup
from core.roles import role_description, role_label
from models.enums import Permission, Role
from models.user import User
from models.validation import Err, Ok


def test_role_parse():
    assert Role.parse("admin") is Role.admin
    assert Role.parse(Role.reader) is Role.reader
    assert Role.parse("ADMIN") is None
    assert Role.parse(None) is None
    assert Role.parse(3) is None


def test_enum_lists():
    assert Role.list() == ["headmaster", "admin", "editor", "reader"]
    assert len(Permission.list()) == 14
    assert str(Permission.manage_users) == "manage_users"


def test_role_labels():
    assert role_label("editor") == "Éditeur"
    assert role_label(Role.headmaster) == "Headmaster"
    assert role_label("ghost") == "ghost"
    assert role_description("reader") == "Lecture seule des documents"
    assert role_description("ghost") == ""


def test_user_from_profile():
    user = User.from_profile({
        "id": "u1",
        "name": "Anne Martin",
        "email": "anne.martin@mairie.fr",
        "role": "admin",
        "avatar_url": "https://cdn.mairie.fr/a.png",
        "created_at": "2024-01-15T09:30:00Z",
    })
    assert user.role is Role.admin
    assert user.avatar == "https://cdn.mairie.fr/a.png"
    assert user.is_active is True
    assert isinstance(user.last_login, datetime)
    assert user.created_at.year == 2024


def test_user_from_profile_inactive_only_when_explicit():
    base = {"id": "u1", "name": "A", "email": "a@mairie.fr", "role": "reader"}
    assert User.from_profile({**base, "isActive": False}).is_active is False
    assert User.from_profile({**base, "is_active": False}).is_active is False
    assert User.from_profile({**base, "isActive": None}).is_active is True


def test_user_rejects_unknown_role():
    with pytest.raises(ValidationError):
        User(id="u1", name="A", email="a@mairie.fr", role="owner")


def test_err_message_positional_or_keyword():
    assert Err("x") == Err(message="x")
    assert Err().message is None
    assert Ok() == Ok()


def test_config_validation_passes_with_defaults():
    validate_config_on_startup()


def test_config_validation_rejects_bad_log_level(monkeypatch):
    monkeypatch.setattr(settings, "LOG_LEVEL", "LOUD")
    with pytest.raises(RuntimeError):
        validate_config_on_startup()
