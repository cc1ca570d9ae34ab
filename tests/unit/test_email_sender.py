from __future__ import annotations

import pytest
import resend

from namu.services.email_sender import EmailSender, shopping_list_html
from namu.services.errors import EmailConfigurationError, EmailDeliveryError


class TestShoppingListHtml:
    def test_newlines_become_breaks(self) -> None:
        assert shopping_list_html("- eggs\n- milk") == "<h3>Your Shopping List:</h3>- eggs<br>- milk"

    def test_markup_is_escaped(self) -> None:
        assert "<script>" not in shopping_list_html("<script>alert(1)</script>")


class TestEmailSender:
    def test_missing_key_is_reported_on_send(self, monkeypatch) -> None:
        sent: list[dict] = []
        monkeypatch.setattr(resend.Emails, "send", lambda params: sent.append(params))
        sender = EmailSender(api_key="", sender="Namu <a@b.c>")

        with pytest.raises(EmailConfigurationError):
            sender.send("cook@example.com", "Hi", "x")
        assert sent == []

    def test_send_passes_params(self, monkeypatch) -> None:
        sent: list[dict] = []
        monkeypatch.setattr(resend.Emails, "send", lambda params: sent.append(params) or {"id": "em_1"})

        EmailSender(api_key="re_test", sender="Namu <a@b.c>").send("cook@example.com", "Hi", "<p>x</p>")

        assert sent == [
            {"from": "Namu <a@b.c>", "to": ["cook@example.com"], "subject": "Hi", "html": "<p>x</p>"}
        ]

    def test_provider_error_is_wrapped(self, monkeypatch) -> None:
        def boom(params):
            raise RuntimeError("403 domain not verified")

        monkeypatch.setattr(resend.Emails, "send", boom)

        with pytest.raises(EmailDeliveryError) as exc_info:
            EmailSender(api_key="re_test", sender="Namu <a@b.c>").send("cook@example.com", "Hi", "x")

        assert exc_info.value.recipient == "cook@example.com"
        assert "domain not verified" in exc_info.value.reason
