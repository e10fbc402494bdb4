"""HTTP-level tests: status codes and JSON envelopes of the v1 routes."""

import runpy
import unittest
from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from portal.core.database import get_db
from portal.core.exceptions import IdentityStoreError
from portal.main import app
from portal.schemas.cep import AddressLookup
from portal.services.cep_lookup import CepNotFoundError, CepServiceUnavailableError
from portal.services.identity_store import create_supervisor
from support import OTHER_VALID_CNPJ, DatabaseTestCase, register_payload

API = "/api/v1"


class ApiTestCase(DatabaseTestCase):
    """TestClient wired to the per-test in-memory database."""

    def setUp(self) -> None:
        super().setUp()

        def _override_get_db():
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = _override_get_db
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.pop(get_db, None)
        super().tearDown()

    def register(self, **overrides: object):
        return self.client.post(f"{API}/auth/register", json=register_payload(**overrides))


class TestRegister(ApiTestCase):
    def test_created(self) -> None:
        resp = self.register()
        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertEqual(body["message"], "associate created successfully")
        user = body["user"]
        self.assertEqual(user["role"], "ASSOCIATE")
        self.assertEqual(user["password"], "")
        self.assertEqual(user["businessTypes"], ["Bar", "Restaurante"])
        self.assertTrue(user["isActive"])
        self.assertNotIn("confirmPassword", user)

    def test_validation_errors_listed(self) -> None:
        resp = self.register(email="", businessTypes=[])
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(
            resp.json()["error"],
            ["Email é obrigatório", "Selecione pelo menos um tipo de negócio"],
        )

    def test_wrong_json_types_are_400(self) -> None:
        resp = self.register(businessTypes="Bar")
        self.assertEqual(resp.status_code, 400)
        self.assertIsInstance(resp.json()["error"], list)

    def test_duplicate_cnpj_conflict(self) -> None:
        self.assertEqual(self.register().status_code, 201)
        resp = self.register(email="outro@bar.com.br")
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json(), {"error": "failed to create associate"})

    def test_second_associate_with_other_cnpj(self) -> None:
        self.assertEqual(self.register().status_code, 201)
        resp = self.register(email="outro@bar.com.br", cnpj=OTHER_VALID_CNPJ)
        self.assertEqual(resp.status_code, 201)


class TestLogin(ApiTestCase):
    def test_success(self) -> None:
        self.register()
        resp = self.client.post(
            f"{API}/auth/login",
            json={"email": "contato@barmodelo.com.br", "password": "senha123"},
        )
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["message"], "login successful")
        self.assertEqual(body["user"]["cnpj"], "11.222.333/0001-81")
        self.assertEqual(body["user"]["password"], "")

    def test_unknown_email_and_wrong_password_identical(self) -> None:
        self.register()
        wrong = self.client.post(
            f"{API}/auth/login",
            json={"email": "contato@barmodelo.com.br", "password": "errada123"},
        )
        unknown = self.client.post(
            f"{API}/auth/login",
            json={"email": "ninguem@bar.com.br", "password": "senha123"},
        )
        self.assertEqual(wrong.status_code, 401)
        self.assertEqual(unknown.status_code, 401)
        self.assertEqual(wrong.json(), unknown.json())
        self.assertEqual(wrong.json(), {"error": "invalid credentials"})

    def test_missing_fields(self) -> None:
        resp = self.client.post(f"{API}/auth/login", json={})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["error"], ["E-mail é obrigatório", "Senha é obrigatória"])

    def test_supervisor_login(self) -> None:
        create_supervisor(self.session, "admin@assoc.org", "Admin", "admin2025!")
        resp = self.client.post(
            f"{API}/auth/login", json={"email": "admin@assoc.org", "password": "admin2025!"}
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["user"]["role"], "SUPERVISOR")
        self.assertIn("manage_users", resp.json()["user"]["permissions"])


class TestUsers(ApiTestCase):
    def test_list(self) -> None:
        self.register()
        create_supervisor(self.session, "admin@assoc.org", "Admin", "admin2025!")
        resp = self.client.get(f"{API}/users")
        self.assertEqual(resp.status_code, 200)
        roles = sorted(u["role"] for u in resp.json()["users"])
        self.assertEqual(roles, ["ASSOCIATE", "SUPERVISOR"])

    @patch("portal.api.v1.users.get_all_users")
    def test_list_storage_failure_is_500(self, mock_get_all) -> None:
        mock_get_all.side_effect = IdentityStoreError("Failed to load users")
        resp = self.client.get(f"{API}/users")
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"error": "internal server error"})

    def test_update(self) -> None:
        associate_id = self.register().json()["user"]["id"]
        resp = self.client.post(
            f"{API}/users/update", json={"userId": associate_id, "isActive": False, "name": "Novo"}
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"message": "user updated successfully"})
        user = self.client.get(f"{API}/users").json()["users"][0]
        self.assertFalse(user["isActive"])
        self.assertEqual(user["name"], "Novo")

    def test_update_validation(self) -> None:
        resp = self.client.post(f"{API}/users/update", json={"role": "ADMIN"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["error"], ["Usuário é obrigatório", "Perfil inválido"])

    def test_update_unknown_is_conflict(self) -> None:
        resp = self.client.post(f"{API}/users/update", json={"userId": "nope", "name": "X"})
        self.assertEqual(resp.status_code, 409)

    def test_delete(self) -> None:
        associate_id = self.register().json()["user"]["id"]
        resp = self.client.post(f"{API}/users/delete", json={"userId": associate_id})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self.client.get(f"{API}/users").json(), {"users": []})

    def test_delete_missing_id(self) -> None:
        resp = self.client.post(f"{API}/users/delete", json={})
        self.assertEqual(resp.status_code, 400)

    def test_delete_unknown_is_conflict(self) -> None:
        resp = self.client.post(f"{API}/users/delete", json={"userId": "nope"})
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json(), {"error": "failed to delete user"})


class TestCepAndMisc(ApiTestCase):
    @patch("portal.api.v1.cep.lookup_cep", new_callable=AsyncMock)
    def test_cep_found(self, mock_lookup: AsyncMock) -> None:
        mock_lookup.return_value = AddressLookup(
            cep="01310-100",
            address="Avenida Paulista",
            neighborhood="Bela Vista",
            city="São Paulo",
            state="SP",
        )
        resp = self.client.get(f"{API}/cep/01310100")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["city"], "São Paulo")

    def test_cep_malformed(self) -> None:
        resp = self.client.get(f"{API}/cep/123")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("error", resp.json())

    @patch("portal.api.v1.cep.lookup_cep", new_callable=AsyncMock)
    def test_cep_not_found(self, mock_lookup: AsyncMock) -> None:
        mock_lookup.side_effect = CepNotFoundError("CEP 99999-999 not found.", 404)
        self.assertEqual(self.client.get(f"{API}/cep/99999999").status_code, 404)

    @patch("portal.api.v1.cep.lookup_cep", new_callable=AsyncMock)
    def test_cep_unavailable(self, mock_lookup: AsyncMock) -> None:
        mock_lookup.side_effect = CepServiceUnavailableError("CEP lookup timed out.")
        self.assertEqual(self.client.get(f"{API}/cep/01310100").status_code, 503)

    def test_business_types(self) -> None:
        resp = self.client.get(f"{API}/auth/business-types")
        self.assertEqual(resp.status_code, 200)
        self.assertIn("Food Truck", resp.json()["businessTypes"])

    def test_health(self) -> None:
        resp = self.client.get(f"{API}/health/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["database"], "connected")


class TestEntrypoint(unittest.TestCase):
    @patch("uvicorn.run")
    def test_module_run_serves_app(self, mock_run) -> None:
        runpy.run_module("portal.main", run_name="__main__")
        mock_run.assert_called_once()
        self.assertEqual(mock_run.call_args.kwargs["port"], 8000)


if __name__ == "__main__":
    unittest.main()
