"""Outbound email through Flask-Mail."""

import logging
from smtplib import SMTPException
from flask import current_app
from flask_mail import Message
from nestsweets.extensions import mail

logger = logging.getLogger(__name__)


def send_email(subject, recipients, body):
    """Send a plain-text email. Returns False when skipped or failed."""
    recipients = [r for r in recipients if r]
    if not recipients:
        logger.warning('Email "%s" skipped: no recipients', subject)
        return False
    if not current_app.config.get('MAIL_SUPPRESS_SEND') and not current_app.config.get('MAIL_USERNAME'):
        logger.warning('Email "%s" skipped: mail server not configured', subject)
        return False
    if not current_app.config.get('MAIL_DEFAULT_SENDER'):
        logger.warning('Email "%s" skipped: no sender address configured', subject)
        return False
    msg = Message(subject=subject, recipients=recipients, body=body)
    try:
        mail.send(msg)
    except (SMTPException, OSError) as e:
        logger.error('Failed to send email "%s": %s', subject, e)
        return False
    logger.info('Email "%s" sent to %s', subject, ', '.join(recipients))
    return True


def send_admin_email(subject, body):
    return send_email(subject, [current_app.config.get('ADMIN_EMAIL')], body)
