# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import pytest
from fastapi import Body, Depends, FastAPI, HTTPException, Request
from fastapi.testclient import TestClient

from core.errors import validation_failed
from core.permission_helpers import (
    require_document_deletion,
    require_document_edit,
    require_role_change,
    require_user_deletion,
    require_user_edit,
    requires_permission,
)
from core.rules import CATEGORY_RULES
from core.validation import validate_and_sanitize
from dependencies.auth import CurrentUser, get_current_user, requires_role


# -----------------------------------------------------
# Stored rows the test routes act on
# -----------------------------------------------------
USERS = {
    "hm-1": {"id": "hm-1", "role": "headmaster"},
    "admin-1": {"id": "admin-1", "role": "admin"},
    "admin-2": {"id": "admin-2", "role": "admin"},
    "editor-1": {"id": "editor-1", "role": "editor"},
    "reader-1": {"id": "reader-1", "role": "reader"},
}

DOCUMENTS = {
    "doc-editor": {"id": "doc-editor", "user_id": "editor-1"},
    "doc-admin": {"id": "doc-admin", "user_id": "admin-1"},
}


def _lookup(table: dict, key: str) -> dict:
    if key not in table:
        raise HTTPException(status_code=404, detail="Not found")
    return table[key]


def build_app(user=None) -> FastAPI:
    """
    Minimal host app: a middleware stands in for the auth layer and
    puts `user` on request.state.
    """
    app = FastAPI()

    @app.middleware("http")
    async def attach_user(request: Request, call_next):
        if user is not None:
            request.state.user = user
        return await call_next(request)

    @app.get("/me")
    def me(current_user: CurrentUser = Depends(get_current_user)):
        return current_user.model_dump()

    @app.get("/documents", dependencies=[Depends(requires_permission("view_all_documents"))])
    def list_documents():
        return {"data": list(DOCUMENTS)}

    @app.get("/system", dependencies=[Depends(requires_role(["headmaster"]))])
    def system():
        return {"status": "ok"}

    @app.put("/documents/{document_id}")
    def edit_document(document_id: str, current_user: CurrentUser = Depends(get_current_user)):
        require_document_edit(current_user, _lookup(DOCUMENTS, document_id))
        return {"id": document_id}

    @app.delete("/documents/{document_id}")
    def delete_document(document_id: str, current_user: CurrentUser = Depends(get_current_user)):
        require_document_deletion(current_user, _lookup(DOCUMENTS, document_id))
        return {"deleted": document_id}

    @app.patch("/users/{user_id}/role")
    def change_role(
        user_id: str,
        role: str = Body(..., embed=True),
        current_user: CurrentUser = Depends(get_current_user),
    ):
        require_role_change(current_user, _lookup(USERS, user_id), role)
        return {"id": user_id, "role": role}

    @app.put("/users/{user_id}")
    def edit_user(user_id: str, current_user: CurrentUser = Depends(get_current_user)):
        require_user_edit(current_user, _lookup(USERS, user_id))
        return {"id": user_id}

    @app.delete("/users/{user_id}")
    def delete_user(user_id: str, current_user: CurrentUser = Depends(get_current_user)):
        require_user_deletion(current_user, _lookup(USERS, user_id))
        return {"deleted": user_id}

    @app.post("/categories", dependencies=[Depends(requires_permission("manage_categories"))])
    def create_category(payload: dict = Body(...)):
        result = validate_and_sanitize(payload, CATEGORY_RULES)
        if not result.is_valid:
            raise validation_failed(result)
        return result.sanitized_data

    return app


@pytest.fixture
def make_client():
    """Return a factory: make_client(user) -> TestClient acting as `user`."""
    clients = []

    def factory(user=None) -> TestClient:
        client = TestClient(build_app(user))
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()


def _user(user_id: str, role: str) -> CurrentUser:
    return CurrentUser(id=user_id, email=f"{user_id}@mairie.fr", role=role)


@pytest.fixture
def headmaster_user():
    return _user("hm-1", "headmaster")


@pytest.fixture
def admin_user():
    return _user("admin-1", "admin")


@pytest.fixture
def editor_user():
    return _user("editor-1", "editor")


@pytest.fixture
def reader_user():
    return _user("reader-1", "reader")
