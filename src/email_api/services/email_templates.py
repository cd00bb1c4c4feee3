"""Subject, plain-text and HTML bodies for every outgoing email.

All values interpolated into HTML are escaped.
"""

from dataclasses import dataclass
from datetime import date
from html import escape
from typing import Optional

BRAND = "DriveCore"


@dataclass(slots=True)
class EmailContent:
    subject: str
    text: str
    html: str


def _layout(title: str, body: str, accent: str = "#2563eb") -> str:
    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
</head>
<body style="margin:0;padding:0;font-family:'Segoe UI',Tahoma,Geneva,Verdana,sans-serif;background-color:#0f172a;">
  <table width="100%" cellpadding="0" cellspacing="0" style="background-color:#0f172a;padding:40px 20px;">
    <tr>
      <td align="center">
        <table width="100%" cellpadding="0" cellspacing="0" style="max-width:560px;background:#1e293b;border-radius:20px;overflow:hidden;">
          <tr>
            <td style="padding:40px;text-align:center;background:{accent};">
              <h1 style="margin:0;color:#ffffff;font-size:26px;">{escape(title)}</h1>
            </td>
          </tr>
          <tr>
            <td style="padding:32px 40px;color:#e2e8f0;font-size:15px;line-height:1.6;">
{body}
            </td>
          </tr>
          <tr>
            <td style="padding:20px 40px;text-align:center;color:#64748b;font-size:12px;">
              &copy; {BRAND}
            </td>
          </tr>
        </table>
      </td>
    </tr>
  </table>
</body>
</html>
"""


def describe_ttl(seconds: int) -> str:
    """Human wording for a link lifetime, e.g. 24 hours, 1 hour, 30 minutes."""
    if seconds >= 3600 and seconds % 3600 == 0:
        value, unit = seconds // 3600, "hour"
    elif seconds >= 60:
        value, unit = max(1, seconds // 60), "minute"
    else:
        value, unit = max(1, seconds), "second"
    return f"{value} {unit}" if value == 1 else f"{value} {unit}s"


def _button(url: str, label: str, color: str = "#2563eb") -> str:
    return (
        f'<p style="text-align:center;margin:28px 0;">'
        f'<a href="{escape(url, quote=True)}" style="display:inline-block;padding:14px 32px;'
        f"background:{color};color:#ffffff;text-decoration:none;border-radius:10px;"
        f'font-weight:600;">{escape(label)}</a></p>'
    )


def verification_email(verification_url: str, ttl_seconds: int = 86400) -> EmailContent:
    expiry = describe_ttl(ttl_seconds)
    text = (
        "Hello!\n\n"
        "Click the link below to verify your email:\n"
        f"{verification_url}\n\n"
        f"This link expires in {expiry}.\n\n"
        "If you did not request this verification, please ignore this email."
    )
    body = (
        "<p>Hello!</p>"
        "<p>Thanks for signing up. Please confirm your email address to activate your account.</p>"
        f"{_button(verification_url, 'Verify email')}"
        f"<p>This link expires in {expiry}.</p>"
        "<p style=\"color:#94a3b8;\">If you did not request this verification, please ignore this email.</p>"
    )
    return EmailContent(
        subject="✉️ Verify your email address",
        text=text,
        html=_layout("Verify your email", body),
    )


def welcome_purchase_email(
    first_name: str,
    verification_url: str,
    plan_name: Optional[str] = None,
    plan_price: Optional[str] = None,
    vehicle_name: Optional[str] = None,
    ttl_seconds: int = 86400,
) -> EmailContent:
    expiry = describe_ttl(ttl_seconds)
    display_plan = plan_name or "GPS Tracker"
    display_vehicle = vehicle_name or "your vehicle"
    price_line = f"Price: {plan_price}\n" if plan_price else ""
    text = (
        f"Hello {first_name}!\n\n"
        "Thank you for your purchase! Your payment was successful.\n\n"
        f"Plan: {display_plan}\n{price_line}\n"
        f"Before you can start tracking {display_vehicle}, please verify your email "
        "address by clicking the link below:\n\n"
        f"{verification_url}\n\n"
        f"This link expires in {expiry}.\n\n"
        "If you have any questions, feel free to contact our support team.\n\n"
        f"Welcome aboard!\nThe {BRAND} Team"
    )
    price_html = f"<br>Price: <strong>{escape(plan_price)}</strong>" if plan_price else ""
    body = (
        f"<p>Hello {escape(first_name)}!</p>"
        "<p>Thank you for your purchase! Your payment was successful.</p>"
        f"<p>Plan: <strong>{escape(display_plan)}</strong>{price_html}</p>"
        f"<p>Before you can start tracking {escape(display_vehicle)}, please verify your email address.</p>"
        f"{_button(verification_url, 'Verify email', '#059669')}"
        f"<p>This link expires in {expiry}.</p>"
        f"<p>Welcome aboard!<br>The {BRAND} Team</p>"
    )
    return EmailContent(
        subject=f"🎉 Welcome to {BRAND} - Payment Successful!",
        text=text,
        html=_layout("Payment Successful!", body, accent="#059669"),
    )


def format_end_date(value: Optional[date]) -> str:
    if value is None:
        return "N/A"
    return f"{value.day} {value:%B %Y}"


def transfer_notification_email(
    accept_url: str,
    imei: str,
    vehicle_name: Optional[str],
    registration_number: Optional[str] = None,
    from_user_name: Optional[str] = None,
    subscription_end_date: Optional[date] = None,
) -> EmailContent:
    vehicle = vehicle_name or "GPS Tracker"
    registration = registration_number or "N/A"
    end_date = format_end_date(subscription_end_date)
    from_line = f"From: {from_user_name}\n" if from_user_name else ""
    text = (
        "Hello!\n\n"
        "You have received a vehicle tracker transfer request.\n\n"
        f"Vehicle: {vehicle}\nRegistration: {registration}\nTracker IMEI: {imei}\n{from_line}\n"
        f"The current subscription is active until: {end_date}\n\n"
        "After this date, you will need to set up your own subscription to continue "
        "using the tracking service.\n\n"
        f"Click here to accept the transfer: {accept_url}\n\n"
        "If you did not expect this transfer, please ignore this email."
    )
    from_html = f"<br>From: <strong>{escape(from_user_name)}</strong>" if from_user_name else ""
    body = (
        "<p>Hello!</p>"
        "<p>You have received a vehicle tracker transfer request.</p>"
        f"<p>Vehicle: <strong>{escape(vehicle)}</strong>"
        f"<br>Registration: <strong>{escape(registration)}</strong>"
        f"<br>Tracker IMEI: <strong>{escape(imei)}</strong>{from_html}</p>"
        f"<p>The current subscription is active until: <strong>{escape(end_date)}</strong>. "
        "After this date, you will need to set up your own subscription.</p>"
        f"{_button(accept_url, 'Accept transfer')}"
        "<p style=\"color:#94a3b8;\">If you did not expect this transfer, please ignore this email.</p>"
    )
    return EmailContent(
        subject=f"🚗 Vehicle Tracker Transfer Request - {vehicle}",
        text=text,
        html=_layout("Tracker Transfer Request", body, accent="#1e40af"),
    )


def device_added_email(
    first_name: str,
    vehicle_name: str,
    plan_name: str,
    plan_price: Optional[str] = None,
    dashboard_url: Optional[str] = None,
) -> EmailContent:
    price_line = f"Price: {plan_price}\n" if plan_price else ""
    dashboard_line = f"\nOpen your dashboard: {dashboard_url}\n" if dashboard_url else ""
    text = (
        f"Hello {first_name}!\n\n"
        f"A new tracker has been added to your account for {vehicle_name}.\n\n"
        f"Plan: {plan_name}\n{price_line}{dashboard_line}\n"
        "If you did not add this device, please contact our support team.\n\n"
        f"The {BRAND} Team"
    )
    price_html = f"<br>Price: <strong>{escape(plan_price)}</strong>" if plan_price else ""
    button = _button(dashboard_url, "Open dashboard") if dashboard_url else ""
    body = (
        f"<p>Hello {escape(first_name)}!</p>"
        f"<p>A new tracker has been added to your account for <strong>{escape(vehicle_name)}</strong>.</p>"
        f"<p>Plan: <strong>{escape(plan_name)}</strong>{price_html}</p>"
        f"{button}"
        "<p style=\"color:#94a3b8;\">If you did not add this device, please contact our support team.</p>"
    )
    return EmailContent(
        subject=f"📍 New tracker added - {vehicle_name}",
        text=text,
        html=_layout("New device added", body),
    )


def invoice_email(
    invoice_id: str,
    amount: str,
    invoice_url: str,
    invoice_pdf: Optional[str] = None,
) -> EmailContent:
    pdf_line = f"Download PDF: {invoice_pdf}\n" if invoice_pdf else ""
    text = (
        "Hello!\n\n"
        f"Your invoice {invoice_id} for {amount} is ready.\n\n"
        f"View invoice: {invoice_url}\n{pdf_line}\n"
        f"Thank you for using {BRAND}."
    )
    pdf_html = (
        f'<p style="text-align:center;"><a href="{escape(invoice_pdf, quote=True)}" '
        'style="color:#93c5fd;">Download PDF</a></p>'
        if invoice_pdf
        else ""
    )
    body = (
        "<p>Hello!</p>"
        f"<p>Your invoice <strong>{escape(invoice_id)}</strong> for "
        f"<strong>{escape(amount)}</strong> is ready.</p>"
        f"{_button(invoice_url, 'View invoice')}"
        f"{pdf_html}"
        f"<p>Thank you for using {BRAND}.</p>"
    )
    return EmailContent(
        subject=f"🧾 Your {BRAND} invoice {invoice_id}",
        text=text,
        html=_layout("Your invoice", body),
    )
