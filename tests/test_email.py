from app.services import email as email_module
from app.services.email import EmailService, EmailTemplateName


class FakeSMTP:
    instances = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.messages = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def ehlo(self):
        pass

    def starttls(self, context=None):
        pass

    def login(self, username, password):
        pass

    def send_message(self, msg):
        self.messages.append(msg)


def test_activation_template_contains_code_and_link():
    service = EmailService(max_workers=1)
    try:
        html = service.render(
            EmailTemplateName.ACTIVATE_ACCOUNT,
            username="Ada <Lovelace>",
            confirmation_url="http://localhost:4200/activate-account",
            activation_code="123456",
            expires_in_minutes=5,
        )
    finally:
        service.shutdown()
    assert "123456" in html
    assert 'href="http://localhost:4200/activate-account"' in html
    assert "Ada &lt;Lovelace&gt;" in html


def test_send_email_async_delivers_over_smtp(monkeypatch):
    FakeSMTP.instances = []
    monkeypatch.setattr(email_module.smtplib, "SMTP", FakeSMTP)
    service = EmailService(max_workers=1)
    try:
        future = service.send_email_async(
            "ada@example.com",
            "Ada Lovelace",
            EmailTemplateName.ACTIVATE_ACCOUNT,
            "http://localhost:4200/activate-account",
            "654321",
            "Account activation",
        )
        future.result(timeout=5)
    finally:
        service.shutdown()

    [smtp] = FakeSMTP.instances
    [msg] = smtp.messages
    assert msg["To"] == "ada@example.com"
    assert msg["Subject"] == "Account activation"
    assert "654321" in msg.get_body(preferencelist=("html",)).get_content()
