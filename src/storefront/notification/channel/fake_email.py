"""Fake email adapter: keeps outgoing mail in memory."""

from uuid import uuid4

from storefront.notification.channel.email_port import EmailDelivery, EmailPort


class FakeEmailAdapter(EmailPort):
    def __init__(self):
        self.sent_emails: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Email delivery failed"
        self.raise_error = False

    def configure(
        self,
        should_succeed: bool = True,
        failure_reason: str = "Email delivery failed",
        raise_error: bool = False,
    ):
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.raise_error = raise_error

    def send(self, to: str, subject: str, body: str) -> EmailDelivery:
        if self.raise_error:
            raise ConnectionError(self.failure_reason)
        if not self.should_succeed:
            return EmailDelivery(status="failed", error=self.failure_reason)

        message_id = f"email-{uuid4().hex[:12]}"
        self.sent_emails.append({"message_id": message_id, "to": to, "subject": subject, "body": body})
        return EmailDelivery(status="sent", message_id=message_id)

    def reset(self):
        self.sent_emails.clear()
        self.configure()
