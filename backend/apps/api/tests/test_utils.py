import unittest

from rest_framework import status

from apps.api.utils import error_response


class ErrorResponseTests(unittest.TestCase):
    def test_default_status_mapping_and_details(self):
        resp = error_response("NOT_FOUND", "Product not found", {"id": "p9"})
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data["error"]["code"], "NOT_FOUND")
        self.assertEqual(resp.data["error"]["status"], status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data["error"]["details"], {"id": "p9"})

    def test_stock_codes_map_to_conflict(self):
        self.assertEqual(error_response("OUT_OF_STOCK", "Out of stock").status_code, 409)
        self.assertEqual(
            error_response("insufficient_stock", "Not enough inventory").status_code, 409
        )

    def test_unknown_code_defaults_to_bad_request(self):
        resp = error_response("SOMETHING_ODD", "odd")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_custom_status_override(self):
        resp = error_response("UNKNOWN", "oops", http_status=status.HTTP_202_ACCEPTED)
        self.assertEqual(resp.status_code, status.HTTP_202_ACCEPTED)
        self.assertEqual(resp.data["error"]["message"], "oops")

    def test_error_response_supports_hint_and_extra(self):
        resp = error_response(
            "SERVICE_UNAVAILABLE",
            "Storage is temporarily unavailable",
            hint="Retry the request.",
            extra={"pendingCart": {"lines": []}},
        )
        payload = resp.data["error"]
        self.assertEqual(resp.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(payload["hint"], "Retry the request.")
        self.assertEqual(payload["extra"], {"pendingCart": {"lines": []}})

    def test_rejects_blank_code_or_message(self):
        with self.assertRaises(ValueError):
            error_response(" ", "message")
        with self.assertRaises(ValueError):
            error_response("NOT_FOUND", "")
