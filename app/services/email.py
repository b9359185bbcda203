"""
Error report emails for the Sportify backend.
Unhandled exceptions are mailed to the addresses in ERROR_TO over SMTP.
"""

import html
import os
import smtplib
import logging
import traceback
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from datetime import datetime

logger = logging.getLogger(__name__)


class EmailService:
    """Sends error reports via SMTP"""

    def __init__(self):
        self.smtp_host = os.getenv("SMTP_HOST")
        self.smtp_port = int(os.getenv("SMTP_PORT", "587"))
        self.smtp_user = os.getenv("SMTP_USER")
        self.smtp_pass = os.getenv("SMTP_PASS")
        self.smtp_use_tls = os.getenv("SMTP_USE_TLS", "true").lower() in {
            "1",
            "true",
            "yes",
        }
        self.enabled = os.getenv("ENABLE_ERROR_EMAILS", "false").lower() in {
            "1",
            "true",
            "yes",
        }
        self.from_addr = os.getenv("ERROR_FROM", "errors@sportify.local")
        self.to_addrs = [
            addr.strip()
            for addr in os.getenv("ERROR_TO", "").split(",")
            if addr.strip()
        ]

    def is_configured(self) -> bool:
        return bool(
            self.smtp_host and self.smtp_user and self.smtp_pass and self.to_addrs
        )

    def should_report(self) -> bool:
        """Error emails go out only when enabled and fully configured"""
        return self.enabled and self.is_configured()

    def send_error_email(self, error_data: dict) -> bool:
        """
        Send an error report.

        Args:
            error_data: Dictionary with path, method, client, user,
                exception and timestamp keys
        """
        if not self.is_configured():
            logger.warning("Email service not configured, skipping error email")
            return False

        msg = self.build_message(
            f"[Sportify Backend][{os.getenv('ENV', 'development')}] ERROR",
            self.render_error_html(error_data),
        )

        try:
            with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=10) as server:
                if self.smtp_use_tls:
                    server.starttls()
                server.login(self.smtp_user, self.smtp_pass)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send error email: {e}")
            return False

        logger.info(f"Error email sent to {', '.join(self.to_addrs)}")
        return True

    def build_message(self, subject: str, html_body: str) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self.from_addr
        msg["To"] = ", ".join(self.to_addrs)
        msg.attach(MIMEText(html_body, "html", "utf-8"))
        return msg

    def render_error_html(self, error_data: dict) -> str:
        path = error_data.get("path", "Unknown")
        method = error_data.get("method", "Unknown")
        client = error_data.get("client", "Unknown")
        user = error_data.get("user", "Anonymous")
        exception = error_data.get("exception")
        timestamp = error_data.get(
            "timestamp", datetime.utcnow().strftime("%Y-%m-%d %H:%M:%S")
        )

        if exception is not None:
            tb_lines = traceback.format_exception(
                type(exception), exception, exception.__traceback__
            )
            traceback_html = "".join(
                f"<div>{html.escape(line.rstrip())}</div>" for line in tb_lines if line.strip()
            )
        else:
            traceback_html = "<div>No traceback available</div>"

        return f"""
        <html>
        <body style="font-family: sans-serif;">
            <h2>Error Report - Sportify Backend ({os.getenv('ENV', 'development').upper()})</h2>
            <p>{html.escape(str(timestamp))} UTC</p>
            <table>
                <tr><td><b>Endpoint</b></td><td>{html.escape(str(method))} {html.escape(str(path))}</td></tr>
                <tr><td><b>User</b></td><td>{html.escape(str(user))}</td></tr>
                <tr><td><b>Client IP</b></td><td>{html.escape(str(client))}</td></tr>
            </table>
            <h3>Stack Trace</h3>
            <pre style="background: #1e1e1e; color: #d4d4d4; padding: 12px;">{traceback_html}</pre>
        </body>
        </html>
        """


# Global email service instance
email_service = EmailService()
