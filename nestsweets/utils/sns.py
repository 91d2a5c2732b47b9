"""Optional AWS SNS admin alerts."""

import logging
import boto3
from botocore.exceptions import BotoCoreError, ClientError
from flask import current_app

logger = logging.getLogger(__name__)


def send_sns_alert(subject, message):
    """Publish to the configured topic. Returns False when skipped or failed."""
    topic_arn = current_app.config.get('SNS_TOPIC_ARN')
    if not topic_arn:
        return False
    try:
        sns = boto3.client('sns', region_name=current_app.config['AWS_REGION'])
        sns.publish(
            TopicArn=topic_arn,
            # SNS subjects are limited to 100 characters
            Subject=subject[:100],
            Message=message
        )
    except (BotoCoreError, ClientError) as e:
        logger.error('Error sending SNS notification: %s', e)
        return False
    return True
