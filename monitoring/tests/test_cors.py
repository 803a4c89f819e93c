from django.test import TestCase
from rest_framework.test import APIClient


class CrossOriginTest(TestCase):

    def setUp(self):
        self.client = APIClient()

    def test_frontend_origin_is_allowed(self):
        response = self.client.get("/api/data-status", HTTP_ORIGIN="http://localhost:3000")

        self.assertEqual(response["Access-Control-Allow-Origin"], "http://localhost:3000")

    def test_other_origins_get_no_cors_header(self):
        response = self.client.get("/api/data-status", HTTP_ORIGIN="http://evil.example")

        self.assertNotIn("Access-Control-Allow-Origin", response)
