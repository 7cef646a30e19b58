from django.test import SimpleTestCase
from rest_framework.test import APITestCase

from core.exceptions import first_error_message


class ErrorMessageTests(SimpleTestCase):
    def test_plain_detail(self):
        self.assertEqual(first_error_message({"detail": "Not a team member."}), "Not a team member.")

    def test_field_errors_are_prefixed(self):
        self.assertEqual(
            first_error_message({"name": ["This field may not be blank."]}),
            "name: This field may not be blank.",
        )

    def test_non_field_errors_are_not_prefixed(self):
        self.assertEqual(first_error_message({"non_field_errors": ["Bad combo."]}), "Bad combo.")

    def test_list_and_empty(self):
        self.assertEqual(first_error_message(["first", "second"]), "first")
        self.assertEqual(first_error_message([]), "")


class HealthCheckTests(APITestCase):
    def test_health_is_public(self):
        resp = self.client.get("/api/health/")

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["status"], "ok")
        self.assertTrue(resp.data["db"])
        self.assertEqual(resp.data["chat_layer"], "InMemoryChannelLayer")
