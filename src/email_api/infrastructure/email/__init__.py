from .mock import MockEmailSender
from .sendgrid import SendGridEmailSender

__all__ = ["MockEmailSender", "SendGridEmailSender"]
