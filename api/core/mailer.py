"""
SMTP delivery for the Taskboard notifications (password recovery).

Port 465 uses implicit TLS; any other port is upgraded with STARTTLS.
"""

from contextlib import contextmanager
from email.message import EmailMessage
import logging
import smtplib
import ssl
from typing import Iterator

from .config import Settings, get_settings

logger = logging.getLogger(__name__)

SMTP_SSL_PORT = 465


def smtp_configured(settings: Settings) -> bool:
    return all(
        (settings.smtp_host, settings.smtp_port, settings.smtp_user, settings.smtp_password, settings.smtp_from)
    )


def build_message(
    settings: Settings, subject: str, to_email: str, html_body: str, text_body: str | None = None
) -> EmailMessage:
    """Mensagem multipart: texto puro como fallback e HTML como alternativa."""
    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = settings.smtp_from
    msg["To"] = to_email
    msg.set_content(text_body or html_body)
    msg.add_alternative(html_body, subtype="html")
    return msg


@contextmanager
def _smtp_connection(settings: Settings) -> Iterator[smtplib.SMTP]:
    context = ssl.create_default_context()
    if settings.smtp_port == SMTP_SSL_PORT:
        server: smtplib.SMTP = smtplib.SMTP_SSL(
            settings.smtp_host, settings.smtp_port, timeout=settings.smtp_timeout_seconds, context=context
        )
    else:
        server = smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=settings.smtp_timeout_seconds)
    with server:
        if settings.smtp_port != SMTP_SSL_PORT:
            server.ehlo()
            server.starttls(context=context)
        server.login(settings.smtp_user, settings.smtp_password)
        yield server


def send_email(subject: str, to_email: str, html_body: str, text_body: str | None = None) -> bool:
    """
    Envia o e-mail com as credenciais SMTP do ambiente.

    Retorna False (e registra no log) quando o SMTP nao esta configurado ou o
    envio falha; quem chama decide se isso invalida a operacao.
    """
    settings = get_settings()
    if not smtp_configured(settings):
        logger.warning("Configuracao SMTP ausente; e-mail para %s nao enviado", to_email)
        return False
    msg = build_message(settings, subject, to_email, html_body, text_body)
    try:
        with _smtp_connection(settings) as server:
            server.send_message(msg)
    except (smtplib.SMTPException, OSError):
        logger.exception("Falha ao enviar e-mail para %s", to_email)
        return False
    logger.info("E-mail '%s' enviado para %s", subject, to_email)
    return True
