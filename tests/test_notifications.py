import asyncio
from datetime import date

import httpx
import pytest

from jobquote.config import get_settings
from jobquote.models.database import BusinessProfile, Client, Invoice, Quote, QuoteItem
from jobquote.services import notifications


def _quote():
    return Quote(
        id=12,
        job_title="4 Power Point Installation",
        description="Four double power points <garage & laundry>",
        subtotal=545.0,
        gst_amount=54.5,
        total=599.5,
        approval_token="tok_abc123",
        items=[
            QuoteItem(position=0, type="labour", name="Professional Residential Electrician Service",
                      quantity=2.0, unit="hours", unit_price=120.0, total=240.0),
            QuoteItem(position=1, type="materials", name="Power Outlet & Materials",
                      quantity=4, unit="each", unit_price=55.0, total=220.0),
        ],
    )


def _profile(**overrides):
    values = dict(
        business_name="Bright Spark Electrical", abn="12 345 678 901", email="dan@brightspark.com.au",
        quote_footer="", payment_terms="Payment due within 7 days", bank_name="Westpac",
        bsb="032-000", account_number="123456", account_name="Bright Spark Pty Ltd",
    )
    values.update(overrides)
    return BusinessProfile(**values)


def _client():
    return Client(name="Jane Smith", email="jane@smithfamily.com.au")


@pytest.fixture
def resend(monkeypatch):
    monkeypatch.setenv("RESEND_API_KEY", "re_test_key")
    get_settings.cache_clear()


def _mock_resend(monkeypatch, responses):
    """Route Resend calls to canned status codes; returns the request log."""
    calls = []
    real_client = httpx.AsyncClient

    def handler(request):
        calls.append(request)
        return httpx.Response(responses[min(len(calls), len(responses)) - 1], json={"id": "email_1"})

    monkeypatch.setattr(
        notifications.httpx, "AsyncClient",
        lambda **kw: real_client(transport=httpx.MockTransport(handler), **kw),
    )
    return calls


def test_quote_email_html():
    html = notifications.build_quote_email_html(
        _quote(), _profile(), _client(), "https://jobquote.app/quote-approval/tok_abc123",
    )
    assert "Hi Jane Smith," in html
    assert "Bright Spark Electrical" in html
    assert "ABN: 12 345 678 901" in html
    assert "Power Outlet &amp; Materials" in html
    assert "&lt;garage &amp; laundry&gt;" in html
    assert "2 hrs" in html
    assert "$599.50" in html
    assert "GST (10%)" in html
    assert 'href="https://jobquote.app/quote-approval/tok_abc123"' in html


def test_quote_email_without_gst_has_no_gst_row():
    quote = _quote()
    quote.gst_amount = 0.0
    html = notifications.build_quote_email_html(quote, _profile(), _client(), "https://x")
    assert "GST (10%)" not in html


def test_invoice_email_html():
    invoice = Invoice(invoice_number="INV-482913", total=599.5, due_date=date(2026, 11, 2))
    html = notifications.build_invoice_email_html(invoice, _quote(), _profile(), _client())
    assert "Invoice INV-482913" in html
    assert "Due 02 November 2026" in html
    assert "BSB: 032-000" in html
    assert "Reference: INV-482913" in html
    assert "Payment due within 7 days" in html


def test_invoice_email_without_bank_details():
    invoice = Invoice(invoice_number="INV-482913", total=100.0, due_date=None)
    html = notifications.build_invoice_email_html(invoice, _quote(), _profile(account_number=""), None)
    assert "Payment details" not in html
    assert "Hello," in html
    assert "Due on receipt" in html


def test_approval_link():
    assert notifications.approval_link(_quote()) == "https://jobquote.app/quote-approval/tok_abc123"


def test_no_transport_configured():
    assert notifications.email_configured() is False
    assert asyncio.run(notifications.send_email("jane@smithfamily.com.au", "Hi", "<p>Hi</p>")) is False


def test_resend_payload(resend, monkeypatch):
    calls = _mock_resend(monkeypatch, [200])
    ok = asyncio.run(notifications.send_quote_email(_quote(), _profile(), _client()))
    assert ok is True
    assert len(calls) == 1
    request = calls[0]
    assert request.url == "https://api.resend.com/emails"
    assert request.headers["Authorization"] == "Bearer re_test_key"
    assert b"jane@smithfamily.com.au" in request.content


def test_resend_retries_server_errors(resend, monkeypatch):
    calls = _mock_resend(monkeypatch, [503, 502, 200])
    assert asyncio.run(notifications.send_email("jane@smithfamily.com.au", "Hi", "<p>Hi</p>")) is True
    assert len(calls) == 3


def test_resend_does_not_retry_client_errors(resend, monkeypatch):
    calls = _mock_resend(monkeypatch, [422])
    assert asyncio.run(notifications.send_email("jane@smithfamily.com.au", "Hi", "<p>Hi</p>")) is False
    assert len(calls) == 1


def test_smtp_fallback(monkeypatch):
    monkeypatch.setenv("SMTP_USER", "dan@brightspark.com.au")
    monkeypatch.setenv("SMTP_PASSWORD", "app-password")
    get_settings.cache_clear()
    sent = []
    monkeypatch.setattr(notifications, "_send_smtp", lambda *args: sent.append(args))

    assert asyncio.run(notifications.send_email("jane@smithfamily.com.au", "Hi", "<p>Hi</p>")) is True
    assert sent[0][:2] == ("jane@smithfamily.com.au", "Hi")
