"""Contact Emails — renders the owner notice and the sender auto-reply.

Invariants:
    - Every user-supplied value is HTML-escaped before it enters an HTML body
    - Owner notice subject carries at most 100 chars of the submitted subject
    - Auto-reply quotes at most 50 chars of the subject, with "..." when cut
    - Pure: returns OutgoingMail values, sends nothing
"""

from html import escape

from portfolio.core.domain_types import ContactSubmission, OutgoingMail

OWNER_SUBJECT_CHARS = 100
REPLY_SUBJECT_CHARS = 50
AUTO_REPLY_SUBJECT = "Thank you for your message!"


def _truncate(text: str, limit: int) -> str:
    return text[:limit] + ("..." if len(text) > limit else "")


def build_owner_notice(
    submission: ContactSubmission, owner_email: str, sender_name: str,
) -> OutgoingMail:
    received = (
        submission.received_at.strftime("%Y-%m-%d %H:%M:%S %Z").strip()
        if submission.received_at else "Unknown"
    )
    ip_address = submission.ip_address or "Unknown"
    subject = submission.subject[:OWNER_SUBJECT_CHARS]
    html = (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
        "<h2>New Contact Message</h2>"
        f"<p><strong>Name:</strong> {escape(submission.name)}</p>"
        f"<p><strong>Email:</strong> {escape(submission.email)}</p>"
        f"<p><strong>Subject:</strong> {escape(subject)}</p>"
        f"<p><strong>IP Address:</strong> {escape(ip_address)}</p>"
        f"<p><strong>Received:</strong> {escape(received)}</p>"
        "<h3>Message:</h3>"
        f'<p style="line-height: 1.6;">{escape(submission.message)}</p>'
        "</div>"
    )
    text = (
        "New Contact Message\n\n"
        f"Name: {submission.name}\n"
        f"Email: {submission.email}\n"
        f"Subject: {subject}\n"
        f"IP Address: {ip_address}\n"
        f"Received: {received}\n\n"
        f"{submission.message}\n"
    )
    return OutgoingMail(
        to=owner_email,
        subject=f"Portfolio Contact: {subject}",
        html=html,
        text=text,
        sender_name=sender_name,
        reply_to=submission.email,
    )


def build_auto_reply(
    submission: ContactSubmission, signature_name: str,
) -> OutgoingMail:
    quoted = _truncate(submission.subject, REPLY_SUBJECT_CHARS)
    html = (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
        f"<h2>Thank You, {escape(submission.name)}!</h2>"
        "<p>Thank you for reaching out! I've received your message about "
        f"\"<strong>{escape(quoted)}</strong>\" and I'll get back to you as soon "
        "as possible.</p>"
        "<p>I typically respond within 24-48 hours.</p>"
        f"<p>Best regards,<br><strong>{escape(signature_name)}</strong></p>"
        "</div>"
    )
    text = (
        f"Thank You, {submission.name}!\n\n"
        f"Thank you for reaching out! I've received your message about \"{quoted}\" "
        "and I'll get back to you as soon as possible.\n"
        "I typically respond within 24-48 hours.\n\n"
        f"Best regards,\n{signature_name}\n"
    )
    return OutgoingMail(
        to=submission.email,
        subject=AUTO_REPLY_SUBJECT,
        html=html,
        text=text,
        sender_name=signature_name,
    )
