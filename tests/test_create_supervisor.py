"""Tests for the create_supervisor bootstrap script."""

import unittest
from unittest.mock import patch

from portal.models import Supervisor, User
from portal.scripts.create_supervisor import main
from support import DatabaseTestCase


class TestCreateSupervisorScript(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        patcher = patch("portal.scripts.create_supervisor.SessionLocal", self.SessionLocal)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_creates_with_default_permissions(self) -> None:
        self.assertEqual(main(["admin@assoc.org", "Admin", "admin2025!"]), 0)
        user = self.session.query(User).one()
        self.assertEqual(user.role, "SUPERVISOR")
        self.assertIn("manage_users", self.session.query(Supervisor).one().permissions)

    def test_explicit_permissions(self) -> None:
        code = main(["admin@assoc.org", "Admin", "admin2025!", "--permission", "view_reports"])
        self.assertEqual(code, 0)
        self.assertEqual(self.session.query(Supervisor).one().permissions, '["view_reports"]')

    def test_existing_email_refused(self) -> None:
        self.assertEqual(main(["admin@assoc.org", "Admin", "admin2025!"]), 0)
        self.assertEqual(main(["admin@assoc.org", "Other", "admin2026!"]), 1)
        self.assertEqual(self.session.query(User).count(), 1)

    def test_weak_password_refused(self) -> None:
        self.assertEqual(main(["admin@assoc.org", "Admin", "short"]), 1)
        self.assertEqual(self.session.query(User).count(), 0)

    def test_bad_email_refused(self) -> None:
        self.assertEqual(main(["admin", "Admin", "admin2025!"]), 1)


if __name__ == "__main__":
    unittest.main()
