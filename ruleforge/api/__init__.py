"""
API Module - HTTP interface to the rule engine.

Exposes rule browsing, configuration editing, validation and sharing as a
REST API. `APIService` holds the logic and works without FastAPI;
`create_app` wraps it in a FastAPI application (optional `api` extra).

All state lives in the service's engine. Nothing is persisted.
"""

from .schemas import (
    # Requests
    CreateConfigurationRequest,
    UpdateConfigurationRequest,
    SetParameterRequest,
    # Responses
    ConfigurationListResponse,
    ConfigurationSummary,
    DeleteConfigurationResponse,
    ErrorResponse,
    GameTypesResponse,
    HealthResponse,
    ImportResponse,
    ParameterValueResponse,
    RuleListResponse,
    ValidationResponse,
    # Shared
    ErrorCode,
    OptionInfo,
    ParameterInfo,
    RuleInfo,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateConfigurationRequest",
    "UpdateConfigurationRequest",
    "SetParameterRequest",
    # Responses
    "ConfigurationListResponse",
    "ConfigurationSummary",
    "DeleteConfigurationResponse",
    "ErrorResponse",
    "GameTypesResponse",
    "HealthResponse",
    "ImportResponse",
    "ParameterValueResponse",
    "RuleListResponse",
    "ValidationResponse",
    # Shared
    "ErrorCode",
    "OptionInfo",
    "ParameterInfo",
    "RuleInfo",
    # Service
    "APIService",
    "create_app",
]
