"""Logging configuration using AWS Lambda Powertools."""

import os
import sys

from aws_lambda_powertools import Logger

# Read log level from environment (default to INFO)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# Structured logs go to stderr so CLI report lines own stdout
logger = Logger(
    service="packer-resource-cleanup",
    level=LOG_LEVEL,
    stream=sys.stderr,
)


def get_logger():
    """Get the configured logger instance.

    Returns Powertools Logger with:
    - Structured JSON logging
    - Lambda context fields when running inside Lambda
    """
    return logger
