"""Shared builders for tests that need a real (in-memory SQLite) database."""

import unittest

from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from portal.core.database import build_engine
from portal.models import Base
from portal.schemas.auth import RegisterRequest

VALID_CNPJ = "11.222.333/0001-81"
OTHER_VALID_CNPJ = "11.444.777/0001-61"


def register_payload(**overrides: object) -> dict:
    """Registration body as the client posts it (camelCase keys)."""
    payload = {
        "email": "contato@barmodelo.com.br",
        "name": "Bar Modelo",
        "password": "senha123",
        "confirmPassword": "senha123",
        "cep": "01310-100",
        "address": "Avenida Paulista",
        "number": "1000",
        "neighborhood": "Bela Vista",
        "city": "São Paulo",
        "state": "SP",
        "phone": "(11) 98765-4321",
        "cnpj": VALID_CNPJ,
        "businessTypes": ["Bar", "Restaurante"],
    }
    payload.update(overrides)
    return payload


def register_request(**overrides: object) -> RegisterRequest:
    return RegisterRequest.model_validate(register_payload(**overrides))


class DatabaseTestCase(unittest.TestCase):
    """Fresh in-memory database per test, foreign keys enforced."""

    def setUp(self) -> None:
        self.engine = build_engine("sqlite://", poolclass=StaticPool)
        Base.metadata.create_all(self.engine)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        self.session = self.SessionLocal()

    def tearDown(self) -> None:
        self.session.close()
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()
