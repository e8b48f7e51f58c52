import logging
import smtplib
import ssl
from concurrent.futures import Future, ThreadPoolExecutor
from email.message import EmailMessage
from email.utils import formatdate, make_msgid
from enum import Enum
from pathlib import Path
from typing import Optional
from jinja2 import Environment, FileSystemLoader, select_autoescape
from app.config import settings

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


class EmailTemplateName(str, Enum):
    ACTIVATE_ACCOUNT = "activate_account"


class EmailService:
    """Renders HTML emails and delivers them over SMTP.

    ``send_email_async`` hands delivery to a small thread pool so the calling
    request never waits on the mail server. Delivery errors are logged there.
    """

    def __init__(self, max_workers: int = settings.mail_workers):
        self._env = Environment(
            loader=FileSystemLoader(str(TEMPLATES_DIR)),
            autoescape=select_autoescape(["html"]),
        )
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="mail")

    def render(self, template: EmailTemplateName, **context) -> str:
        return self._env.get_template(f"{template.value}.html").render(**context)

    def send_email(
        self,
        to: str,
        username: str,
        template: Optional[EmailTemplateName],
        confirmation_url: str,
        activation_code: str,
        subject: str,
    ) -> None:
        """Render and send one email synchronously."""
        body = self.render(
            template or EmailTemplateName.ACTIVATE_ACCOUNT,
            username=username,
            confirmation_url=confirmation_url,
            activation_code=activation_code,
            expires_in_minutes=settings.activation_token_minutes,
        )

        msg = EmailMessage()
        msg["From"] = settings.mail_from
        msg["To"] = to
        msg["Subject"] = subject
        msg["Date"] = formatdate(localtime=True)
        msg["Message-Id"] = make_msgid("booksocial")
        msg.set_content(f"Your activation code is {activation_code}. Activate at {confirmation_url}")
        msg.add_alternative(body, subtype="html")

        with smtplib.SMTP(settings.mail_host, settings.mail_port, timeout=30) as server:
            server.ehlo()
            if settings.mail_use_tls:
                server.starttls(context=ssl.create_default_context())
                server.ehlo()
            if settings.mail_username and settings.mail_password:
                server.login(settings.mail_username, settings.mail_password)
            server.send_message(msg)
        logger.info(f"Email '{subject}' sent to {to}")

    def send_email_async(self, *args, **kwargs) -> Future:
        """Fire-and-forget variant of send_email."""
        future = self._executor.submit(self.send_email, *args, **kwargs)
        future.add_done_callback(self._log_failure)
        return future

    @staticmethod
    def _log_failure(future: Future) -> None:
        error = future.exception()
        if error is not None:
            logger.error(f"Email delivery failed: {error}", exc_info=error)

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False)


email_service = EmailService()


def get_email_service() -> EmailService:
    return email_service
