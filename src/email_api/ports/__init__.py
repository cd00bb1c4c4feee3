from .email import EmailMessage, EmailSender
from .token_store import TokenStore

__all__ = ["EmailMessage", "EmailSender", "TokenStore"]
