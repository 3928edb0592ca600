from abc import ABC, abstractmethod


class IEmailSender(ABC):
    """Outbound transactional email - application layer"""

    @abstractmethod
    async def send(self, to: str, subject: str, html_body: str) -> None:
        """Deliver one HTML email. Raises on delivery failure."""
        pass
