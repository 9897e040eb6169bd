"""
Tests for sign-in, registration and the session token gate.

Tests:
- Sign-in success and the shape of its response
- Enumeration resistance (unknown user vs wrong password)
- Store failures reported as service unavailable
- Registration
- 401 / 403 from the token gate
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from jobboard.core.database import get_db
from jobboard.core.deps import get_current_claims
from jobboard.core.exceptions import register_exception_handlers
from jobboard.core.security import create_access_token, decode_token, verify_password
from jobboard.models.user import User
from jobboard.schemas.user import TokenClaims
from main import app


class UnavailableSession:
    """Stand-in session whose store is unreachable."""

    def query(self, *args, **kwargs):
        raise OperationalError("SELECT * FROM users", {}, Exception("could not connect to server: 10.0.0.5"))

    def rollback(self):
        pass

    def close(self):
        pass


class TestSignIn:
    """Test the sign-in endpoint"""

    def test_sign_in_success(self, client, create_user):
        user = create_user("student_sam", password="TestPass123!")

        response = client.post("/sign-in", json={"username": "student_sam", "password": "TestPass123!"})

        assert response.status_code == 200
        data = response.json()
        assert data["user"] == {"username": "student_sam"}
        assert "password_hash" not in response.text

        claims = decode_token(data["token"])
        assert claims.subject_id == user.id
        assert claims.username == "student_sam"

    def test_sign_in_wrong_password(self, client, create_user):
        create_user("student_sam", password="CorrectPass123!")

        response = client.post("/sign-in", json={"username": "student_sam", "password": "WrongPass123!"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"

    def test_unknown_user_and_wrong_password_look_the_same(self, client, create_user):
        """Responses must not reveal whether the account exists"""
        create_user("student_sam", password="CorrectPass123!")

        wrong_password = client.post("/sign-in", json={"username": "student_sam", "password": "WrongPass123!"})
        unknown_user = client.post("/sign-in", json={"username": "nobody", "password": "WrongPass123!"})

        assert wrong_password.status_code == unknown_user.status_code == 401
        assert wrong_password.json() == unknown_user.json()

    def test_sign_in_with_corrupted_stored_hash(self, client, db_session):
        db_session.add(User(username="broken", password_hash="not-a-hash"))
        db_session.commit()

        response = client.post("/sign-in", json={"username": "broken", "password": "anything"})

        assert response.status_code == 401

    def test_sign_in_store_unavailable(self, client):
        """Store outages are not reported as bad credentials and leak no driver detail"""
        app.dependency_overrides[get_db] = lambda: UnavailableSession()

        response = client.post("/sign-in", json={"username": "student_sam", "password": "TestPass123!"})

        assert response.status_code == 500
        assert response.json()["error"] == "service_unavailable"
        assert "10.0.0.5" not in response.text
        assert "Invalid credentials" not in response.text

    def test_sign_in_missing_password(self, client):
        response = client.post("/sign-in", json={"username": "student_sam"})

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_sign_in_password_with_nul(self, client, create_user):
        create_user("student_sam", password="TestPass123!")

        response = client.post("/sign-in", json={"username": "student_sam", "password": "Test\u0000Pass123!"})

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"


class TestRegistration:
    """Test account creation"""

    def test_register_success(self, client, db_session):
        response = client.post("/users", json={
            "account_username": "new_student",
            "password": "SecurePass123!",
            "real_name": "New Student",
            "city": "Austin",
        })

        assert response.status_code == 201
        user_id = response.json()["user_id"]

        user = db_session.query(User).filter(User.id == user_id).first()
        assert user.username == "new_student"
        assert user.city == "Austin"
        assert user.is_admin is False
        assert user.password_hash != "SecurePass123!"
        assert verify_password("SecurePass123!", user.password_hash)

    def test_registered_user_can_sign_in(self, client):
        client.post("/users", json={"account_username": "new_student", "password": "SecurePass123!"})

        response = client.post("/sign-in", json={"username": "new_student", "password": "SecurePass123!"})

        assert response.status_code == 200

    def test_register_duplicate_username(self, client, create_user):
        create_user("taken")

        response = client.post("/users", json={"account_username": "taken", "password": "SecurePass123!"})

        assert response.status_code == 400
        assert "already registered" in response.json()["detail"].lower()

    def test_register_short_password(self, client):
        response = client.post("/users", json={"account_username": "new_student", "password": "short"})

        assert response.status_code == 400

    def test_register_password_with_nul(self, client, db_session):
        response = client.post("/users", json={"account_username": "nul_user", "password": "abc\u0000defghij"})

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        assert db_session.query(User).filter(User.username == "nul_user").first() is None


class TestTokenGate:
    """Test that identity-disclosing endpoints require a valid token"""

    def test_missing_token_is_401(self, client, applicant):
        response = client.get("/get-user", params={"username": applicant.username})

        assert response.status_code == 401
        assert "password_hash" not in response.text

    def test_invalid_token_is_403(self, client, applicant):
        response = client.get(
            f"/get-user/{applicant.id}",
            headers={"Authorization": "Bearer invalid.token.here"}
        )

        assert response.status_code == 403

    def test_expired_token_is_403(self, client, applicant):
        token = create_access_token(
            data={"sub": str(applicant.id), "username": applicant.username},
            expires_delta=timedelta(hours=24),
            issued_at=datetime.now(timezone.utc) - timedelta(hours=25),
        )

        response = client.get(f"/get-user/{applicant.id}", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 403
        assert "expired" in response.json()["detail"].lower()

    def test_token_from_other_secret_is_403(self, client, applicant):
        token = create_access_token(
            data={"sub": str(applicant.id), "username": applicant.username},
            secret_key="not-the-server-secret",
        )

        response = client.get(f"/get-user/{applicant.id}", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 403

    def test_wrong_scheme_is_403(self, client, applicant):
        response = client.get(f"/get-user/{applicant.id}", headers={"Authorization": "Token abc.def.ghi"})

        assert response.status_code == 403
        assert response.json()["detail"] == "Invalid token"

    def test_bearer_without_token_is_401(self, client, applicant):
        response = client.get(f"/get-user/{applicant.id}", headers={"Authorization": "Bearer"})

        assert response.status_code == 401

    def test_get_user_by_username(self, client, applicant, owner, auth_headers):
        response = client.get("/get-user", params={"username": owner.username}, headers=auth_headers(applicant))

        assert response.status_code == 200
        data = response.json()
        assert data["username"] == owner.username
        assert data["is_teacher"] is True
        assert "password_hash" not in data

    def test_get_user_by_id_not_found(self, client, applicant, auth_headers):
        response = client.get("/get-user/99999", headers=auth_headers(applicant))

        assert response.status_code == 404

    def test_admin_status(self, client, applicant, admin_user, auth_headers):
        headers = auth_headers(applicant)

        response = client.get(f"/users/{admin_user.id}/admin-status", headers=headers)
        assert response.json() == {"user_id": admin_user.id, "isAdmin": True}

        response = client.get(f"/users/{applicant.id}/admin-status", headers=headers)
        assert response.json() == {"user_id": applicant.id, "isAdmin": False}

    def test_admin_status_requires_token(self, client, admin_user):
        response = client.get(f"/users/{admin_user.id}/admin-status")

        assert response.status_code == 401

    def test_token_outlives_deleted_user(self, client, db_session, create_user, owner, auth_headers):
        """Tokens are stateless: deleting the user does not revoke an issued token"""
        departed = create_user("departed")
        headers = auth_headers(departed)
        db_session.delete(departed)
        db_session.commit()

        response = client.get(f"/get-user/{owner.id}", headers=headers)

        assert response.status_code == 200

    def test_oversized_user_id_is_400(self, client, applicant, auth_headers):
        response = client.get(f"/get-user/{2**63}", headers=auth_headers(applicant))

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"


class TestRequestContext:
    """The gate attaches verified claims to the request"""

    @pytest.fixture
    def context_client(self):
        context_app = FastAPI()
        register_exception_handlers(context_app)

        @context_app.get("/whoami")
        def whoami(request: Request, claims: TokenClaims = Depends(get_current_claims)):
            return {
                "subject_id": request.state.claims.subject_id,
                "username": request.state.claims.username,
                "same_claims": request.state.claims == claims,
            }

        return TestClient(context_app)

    def test_claims_attached_to_request_state(self, context_client):
        token = create_access_token(data={"sub": "42", "username": "student_sam"})

        response = context_client.get("/whoami", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json() == {"subject_id": 42, "username": "student_sam", "same_claims": True}

    def test_rejected_token_never_reaches_handler(self, context_client):
        response = context_client.get("/whoami", headers={"Authorization": "Bearer invalid.token.here"})

        assert response.status_code == 403
