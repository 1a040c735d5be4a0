"""Notification service: email quotes and invoices to customers."""

import logging
import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from html import escape
from typing import Optional

import httpx
from tenacity import retry, retry_if_exception, stop_after_attempt, wait_exponential

from jobquote.config import get_settings
from jobquote.models.database import BusinessProfile, Client, Invoice, Quote, QuoteItem
from jobquote.services.totals import format_currency

logger = logging.getLogger("jobquote.notifications")


def _item_rows(items: list[QuoteItem]) -> str:
    rows = ""
    for item in items:
        qty = f"{item.quantity:g} hrs" if item.unit == "hours" else f"{item.quantity:g}"
        rows += f"""
        <tr>
            <td style="padding: 12px; border-bottom: 1px solid #f0f0f0;">
                <div style="font-weight: 600; color: #2d3748;">{escape(item.name)}</div>
                <div style="font-size: 12px; color: #718096; text-transform: capitalize;">{escape(item.type)}</div>
            </td>
            <td style="padding: 12px; text-align: center; border-bottom: 1px solid #f0f0f0;">{qty}</td>
            <td style="padding: 12px; text-align: right; border-bottom: 1px solid #f0f0f0;">{format_currency(item.unit_price)}</td>
            <td style="padding: 12px; text-align: right; font-weight: 600; border-bottom: 1px solid #f0f0f0;">{format_currency(item.total)}</td>
        </tr>
        """
    return rows


def _totals_rows(subtotal: float, gst_amount: float, total: float) -> str:
    gst_row = ""
    if gst_amount:
        gst_row = f"""
        <tr><td style="padding: 4px 0; color: #4a5568;">GST (10%)</td>
            <td style="padding: 4px 0; text-align: right;">{format_currency(gst_amount)}</td></tr>
        """
    return f"""
    <table style="width: 100%; margin-top: 16px;">
        <tr><td style="padding: 4px 0; color: #4a5568;">Subtotal</td>
            <td style="padding: 4px 0; text-align: right;">{format_currency(subtotal)}</td></tr>
        {gst_row}
        <tr><td style="padding: 8px 0; font-weight: 700; font-size: 18px;">Total</td>
            <td style="padding: 8px 0; text-align: right; font-weight: 700; font-size: 18px;">{format_currency(total)}</td></tr>
    </table>
    """


def _header(profile: BusinessProfile) -> str:
    business = escape(profile.business_name or "Professional Services")
    abn = f'<p style="color: #e2e8f0; font-size: 14px; margin: 0;">ABN: {escape(profile.abn)}</p>' if profile.abn else ""
    return f"""
    <div style="background: #2d3748; padding: 32px 24px; text-align: center; color: white;">
        <h1 style="color: #ffffff; font-size: 26px; margin: 0 0 8px 0;">{business}</h1>
        {abn}
    </div>
    """


def build_quote_email_html(
    quote: Quote,
    profile: BusinessProfile,
    client: Optional[Client],
    approval_link: str,
) -> str:
    """Build HTML email body for a quote with an approve/decline link."""
    greeting = f"Hi {escape(client.name)}," if client and client.name else "Hello,"
    footer = f'<p style="color: #718096; font-size: 13px;">{escape(profile.quote_footer)}</p>' if profile.quote_footer else ""

    return f"""
    <div style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif; max-width: 600px; margin: 0 auto; background: #ffffff; color: #2d3748;">
        {_header(profile)}
        <div style="padding: 32px 24px;">
            <p style="font-size: 18px; font-weight: 500;">{greeting}</p>
            <p style="color: #4a5568;">Thank you for the opportunity to quote on your job. Please find the details below.</p>

            <div style="background: #f7fafc; padding: 24px; border-radius: 12px; border-left: 4px solid #2d3748; margin-bottom: 24px;">
                <div style="font-size: 22px; font-weight: bold;">{escape(quote.job_title)}</div>
                <div style="color: #718096; font-size: 13px; text-transform: uppercase;">Quote #{quote.id}</div>
                <div style="color: #4a5568; margin-top: 8px;">{escape(quote.description or "")}</div>
            </div>

            <table style="width: 100%; border-collapse: collapse; border: 1px solid #e2e8f0;">
                <thead>
                    <tr style="background: #f7fafc;">
                        <th style="padding: 12px; text-align: left; font-size: 13px; color: #4a5568;">Item</th>
                        <th style="padding: 12px; text-align: center; font-size: 13px; color: #4a5568;">Qty</th>
                        <th style="padding: 12px; text-align: right; font-size: 13px; color: #4a5568;">Rate</th>
                        <th style="padding: 12px; text-align: right; font-size: 13px; color: #4a5568;">Amount</th>
                    </tr>
                </thead>
                <tbody>{_item_rows(quote.items)}</tbody>
            </table>
            {_totals_rows(quote.subtotal, quote.gst_amount, quote.total)}

            <div style="text-align: center; margin: 32px 0;">
                <a href="{escape(approval_link)}" style="
                    background: #2d3748; color: #ffffff; padding: 14px 32px; border-radius: 8px;
                    text-decoration: none; font-weight: 600;
                ">Review &amp; Approve Quote</a>
            </div>
            {footer}
        </div>
    </div>
    """


def build_invoice_email_html(
    invoice: Invoice,
    quote: Quote,
    profile: BusinessProfile,
    client: Optional[Client],
) -> str:
    """Build HTML email body for an invoice, with bank details when set."""
    greeting = f"Hi {escape(client.name)}," if client and client.name else "Hello,"
    due = invoice.due_date.strftime("%d %B %Y") if invoice.due_date else "on receipt"

    payment = ""
    if profile.account_number:
        payment = f"""
        <div style="background: #f7fafc; padding: 20px; border-radius: 12px; margin-top: 24px;">
            <div style="font-weight: 700; margin-bottom: 8px;">Payment details</div>
            <div>Bank: {escape(profile.bank_name or "")}</div>
            <div>Account name: {escape(profile.account_name or "")}</div>
            <div>BSB: {escape(profile.bsb or "")}</div>
            <div>Account: {escape(profile.account_number)}</div>
            <div>Reference: {escape(invoice.invoice_number)}</div>
        </div>
        """
    terms = f'<p style="color: #718096; font-size: 13px;">{escape(profile.payment_terms)}</p>' if profile.payment_terms else ""

    return f"""
    <div style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif; max-width: 600px; margin: 0 auto; background: #ffffff; color: #2d3748;">
        {_header(profile)}
        <div style="padding: 32px 24px;">
            <p style="font-size: 18px; font-weight: 500;">{greeting}</p>
            <p style="color: #4a5568;">Please find your invoice for <b>{escape(quote.job_title)}</b> below.</p>

            <div style="text-align: center; background: #2d3748; color: white; padding: 28px; border-radius: 12px;">
                <div style="font-size: 14px; opacity: 0.9;">Invoice {escape(invoice.invoice_number)}</div>
                <div style="font-size: 38px; font-weight: bold;">{format_currency(invoice.total)}</div>
                <div style="font-size: 14px; opacity: 0.9;">Due {due}</div>
            </div>

            <table style="width: 100%; border-collapse: collapse; border: 1px solid #e2e8f0; margin-top: 24px;">
                <tbody>{_item_rows(quote.items)}</tbody>
            </table>
            {_totals_rows(quote.subtotal, quote.gst_amount, quote.total)}
            {payment}
            {terms}
        </div>
    </div>
    """


# ─── TRANSPORTS ──────────────────────────────────────────────────────────────

def email_configured() -> bool:
    settings = get_settings()
    return bool(settings.resend_api_key or (settings.smtp_user and settings.smtp_password))


def _is_retryable(exc: BaseException) -> bool:
    if isinstance(exc, httpx.TransportError):
        return True
    return isinstance(exc, httpx.HTTPStatusError) and exc.response.status_code >= 500


@retry(
    retry=retry_if_exception(_is_retryable),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.5, max=4),
    reraise=True,
)
async def _post_resend(payload: dict):
    settings = get_settings()
    async with httpx.AsyncClient(timeout=15.0) as client:
        resp = await client.post(
            settings.resend_api_url,
            headers={"Authorization": f"Bearer {settings.resend_api_key}"},
            json=payload,
        )
        resp.raise_for_status()


def _send_smtp(to_email: str, subject: str, html_body: str, reply_to: str = ""):
    settings = get_settings()
    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = settings.quote_sender_email
    msg["To"] = to_email
    if reply_to:
        msg["Reply-To"] = reply_to
    msg.attach(MIMEText(html_body, "html"))

    with smtplib.SMTP(settings.smtp_host, settings.smtp_port) as server:
        server.starttls()
        server.login(settings.smtp_user, settings.smtp_password)
        server.sendmail(settings.quote_sender_email, to_email, msg.as_string())


async def send_email(to_email: str, subject: str, html_body: str, reply_to: str = "") -> bool:
    """Send through Resend when a key is set, else SMTP. False on failure."""
    settings = get_settings()

    if not email_configured():
        logger.warning("No email transport configured, skipping email")
        return False

    try:
        if settings.resend_api_key:
            payload = {
                "from": settings.quote_sender_email,
                "to": [to_email],
                "subject": subject,
                "html": html_body,
            }
            if reply_to:
                payload["reply_to"] = reply_to
            await _post_resend(payload)
        else:
            _send_smtp(to_email, subject, html_body, reply_to)
        logger.info(f"Email sent to {to_email}: {subject}")
        return True
    except (httpx.HTTPError, smtplib.SMTPException, OSError) as e:
        logger.error(f"Email send to {to_email} failed: {e}")
        return False


def approval_link(quote: Quote) -> str:
    return f"{get_settings().approval_base_url.rstrip('/')}/{quote.approval_token}"


async def send_quote_email(quote: Quote, profile: BusinessProfile, client: Client) -> bool:
    business = profile.business_name or "Professional Services"
    subject = f"Quote from {business}: {quote.job_title}"
    html = build_quote_email_html(quote, profile, client, approval_link(quote))
    return await send_email(client.email, subject, html, reply_to=profile.email or "")


async def send_invoice_email(invoice: Invoice, quote: Quote, profile: BusinessProfile, client: Client) -> bool:
    business = profile.business_name or "Professional Services"
    subject = f"Invoice {invoice.invoice_number} from {business}"
    html = build_invoice_email_html(invoice, quote, profile, client)
    return await send_email(client.email, subject, html, reply_to=profile.email or "")
