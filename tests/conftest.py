"""
Test environment: in-memory SQLite and cheap bcrypt.

Set before any portal module is imported, because settings and the default
engine are created at import time.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["APP_ENV"] = "dev"
os.environ["CEP_LOOKUP_BASE_URL"] = "https://viacep.test/ws"
