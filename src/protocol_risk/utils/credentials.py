"""
Credential storage for the analysis service API key.
The environment wins over the OS keyring.
"""

import logging
import os
from typing import Optional

import keyring
from keyring.errors import KeyringError

logger = logging.getLogger(__name__)

SERVICE_NAME = "protocol-risk"
KEY_NAME = "analysis-service"
API_KEY_ENV = "PROTOCOL_RISK_API_KEY"


def get_api_key() -> Optional[str]:
    """
    Retrieve the analysis service API key.

    Returns:
        API key or None if not configured
    """
    env_key = os.environ.get(API_KEY_ENV)
    if env_key:
        return env_key

    try:
        return keyring.get_password(SERVICE_NAME, KEY_NAME)
    except KeyringError as e:
        logger.debug(f"Failed to read API key from keyring: {e}")
        return None


def save_api_key(api_key: str) -> bool:
    """
    Save the API key securely using the OS keyring.

    Returns:
        True if saved successfully
    """
    try:
        keyring.set_password(SERVICE_NAME, KEY_NAME, api_key)
    except KeyringError as e:
        logger.error(f"Failed to save API key: {e}")
        return False
    logger.info("Saved analysis service API key to keyring")
    return True


def delete_api_key() -> bool:
    try:
        keyring.delete_password(SERVICE_NAME, KEY_NAME)
    except KeyringError as e:
        logger.debug(f"Failed to delete API key: {e}")
        return False
    logger.info("Deleted analysis service API key from keyring")
    return True
