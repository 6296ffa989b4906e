"""
Tests for service metadata routes.
"""

from django.test import SimpleTestCase


class HealthCheckTest(SimpleTestCase):

    def test_health(self):
        response = self.client.get('/health/')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "healthy", "service": "org-access"})

    def test_root_lists_endpoints(self):
        response = self.client.get('/')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['endpoints']['health'], '/health/')
