import pytest

pytestmark = pytest.mark.unit


class TestSensitiveDataMasking:
    def test_email_masked(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "customer": "alice@example.com"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "alice@example.com" not in result["customer"]
        assert "***MASKED***" in result["customer"]

    def test_email_inside_sentence_masked(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "detail": "sent receipt to bob@shop.io today"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "bob@shop.io" not in result["detail"]
        assert result["detail"].startswith("sent receipt to ")

    def test_password_masked(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "data": "password='s3cret123'"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "s3cret123" not in result["data"]
        assert "***MASKED***" in result["data"]

    def test_token_masked(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "header": "token=abc123xyz"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "abc123xyz" not in result["header"]
        assert "***MASKED***" in result["header"]

    def test_non_sensitive_data_unchanged(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "order.checkout_completed", "order_id": "ORD-001"}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["order_id"] == "ORD-001"
        assert result["event"] == "order.checkout_completed"

    def test_non_string_values_untouched(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "total_cents": 700}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["total_cents"] == 700
