# app/utils/alert_headers.py
"""
Alert headers attached to registry responses so a dashboard can show a
toast without parsing the body.

  success → X-<APP_NAME>-alert: <APP_NAME>.<entity>.created|updated|deleted
            X-<APP_NAME>-params: <id>
  failure → X-<APP_NAME>-error: error.<errorKey>
            X-<APP_NAME>-params: <entity>
"""

from app.config import settings


def create_alert(message: str, param: str) -> dict:
    return {
        f"X-{settings.APP_NAME}-alert": message,
        f"X-{settings.APP_NAME}-params": param,
    }


def entity_creation_alert(entity_name: str, param: str) -> dict:
    return create_alert(f"{settings.APP_NAME}.{entity_name}.created", param)


def entity_update_alert(entity_name: str, param: str) -> dict:
    return create_alert(f"{settings.APP_NAME}.{entity_name}.updated", param)


def entity_deletion_alert(entity_name: str, param: str) -> dict:
    return create_alert(f"{settings.APP_NAME}.{entity_name}.deleted", param)


def failure_alert(entity_name: str, error_key: str) -> dict:
    return {
        f"X-{settings.APP_NAME}-error": f"error.{error_key}",
        f"X-{settings.APP_NAME}-params": entity_name,
    }
