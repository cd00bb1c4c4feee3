from dataclasses import dataclass
from typing import Protocol


@dataclass(slots=True)
class EmailMessage:
    to_email: str
    from_email: str
    subject: str
    text: str
    html: str


class EmailSender(Protocol):
    """Protocol for email sending operations.

    Implementations raise ``DeliveryError`` when the provider does not accept
    the message.
    """

    async def send(self, message: EmailMessage) -> None: ...
