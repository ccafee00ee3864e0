"""Email dispatch over SMTP.

One ``EmailDispatcher`` is built per application and kept on ``app.state``.
Delivery is best effort: ``send`` reports success as a bool and never raises,
so a mail outage cannot fail the request that triggered it.
"""

import logging
import smtplib
from email.mime.text import MIMEText
from typing import Optional

logger = logging.getLogger(__name__)


class EmailDispatcher:
    def __init__(
        self,
        host: str,
        port: int,
        username: str = "",
        password: str = "",
        from_email: str = "",
        timeout: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.from_email = from_email or username
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings) -> "EmailDispatcher":
        return cls(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            username=settings.SMTP_USERNAME,
            password=settings.SMTP_PASSWORD,
            from_email=settings.DEFAULT_FROM_EMAIL,
            timeout=settings.EMAIL_TIMEOUT_SECONDS,
        )

    @property
    def configured(self) -> bool:
        return bool(self.username and self.password)

    def send(self, to_email: Optional[str], subject: str, body: str) -> bool:
        if not to_email:
            logger.warning("[email] no recipient for '%s', skipped", subject)
            return False
        if not self.configured:
            logger.info("[email] SMTP not configured, would have sent to %s: %s", to_email, subject)
            return False

        msg = MIMEText(body, "plain")
        msg["Subject"] = subject
        msg["From"] = self.from_email
        msg["To"] = to_email

        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                server.starttls()
                server.login(self.username, self.password)
                server.sendmail(self.from_email, [to_email], msg.as_string())
        except smtplib.SMTPAuthenticationError as exc:
            logger.error("[email] SMTP authentication failed: %s", exc)
            return False
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("[email] failed to send to %s: %s: %s", to_email, type(exc).__name__, exc)
            return False

        logger.info("[email] sent to %s: %s", to_email, subject)
        return True

    def close(self) -> None:
        pass
