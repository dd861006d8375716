"""Integrações AWS (IoT Core)."""

from app.infra.aws.iot_endpoint import IotEndpointResolver

__all__ = ["IotEndpointResolver"]
