"""
FastAPI Application - REST API over the rule engine.

Endpoints:
    GET    /health, /api/v1/health                         Health check
    GET    /api/v1/games                                   List game types
    GET    /api/v1/games/{game_type}/rules                 List rules (optional ?category=)
    GET    /api/v1/rules/{rule_id}                         Get a rule definition
    POST   /api/v1/configurations                          Create configuration
    GET    /api/v1/configurations                          List configurations
    GET    /api/v1/configurations/{id}                     Get configuration
    PATCH  /api/v1/configurations/{id}                     Update fields
    DELETE /api/v1/configurations/{id}                     Delete configuration
    POST   /api/v1/configurations/{id}/rules/{rule_id}     Enable rule
    DELETE /api/v1/configurations/{id}/rules/{rule_id}     Disable rule
    GET    /api/v1/configurations/{id}/rules/{rule_id}/parameters/{key}  Effective value
    PUT    /api/v1/configurations/{id}/rules/{rule_id}/parameters/{key}  Override value
    DELETE /api/v1/configurations/{id}/rules/{rule_id}/parameters/{key}  Reset to default
    GET    /api/v1/configurations/{id}/validation          Validate
    GET    /api/v1/configurations/{id}/export              Export as JSON text
    POST   /api/v1/configurations/import                   Import JSON text
    POST   /api/v1/configurations/{id}/modification        Create modification
    POST   /api/v1/modifications/apply                     Apply modification

Configurations and modifications use the camelCase wire documents; all
other bodies are snake_case. Errors share the ErrorResponse shape.
"""

from typing import Annotated, Any, Optional, Union
import logging
import os


# Environment configuration
RULEFORGE_ENV = os.getenv("RULEFORGE_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
RULEFORGE_BUILTIN_GAMES = os.getenv("RULEFORGE_BUILTIN_GAMES", "")

logger = logging.getLogger(__name__)


def _builtin_pack_names() -> Optional[list[str]]:
    names = [name.strip() for name in RULEFORGE_BUILTIN_GAMES.split(",") if name.strip()]
    return names or None


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance. When omitted a new engine is
            built and the built-in rule packs named by RULEFORGE_BUILTIN_GAMES
            (all of them by default) are installed into it.

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Body, Query, Request
        from fastapi.concurrency import run_in_threadpool
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse, Response
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install ruleforge[api]"
        )

    from .service import APIService
    from .schemas import (
        # Request models
        CreateConfigurationRequest,
        UpdateConfigurationRequest,
        SetParameterRequest,
        # Response models
        ConfigurationListResponse,
        DeleteConfigurationResponse,
        ErrorResponse,
        GameTypesResponse,
        HealthResponse,
        ImportResponse,
        ParameterValueResponse,
        RuleInfo,
        RuleListResponse,
        ValidationResponse,
        # Enums
        ErrorCode,
    )
    from ..sharing import ConfigurationDocument, ModificationDocument
    from .. import __version__

    app = FastAPI(
        title="RuleForge API",
        description="""
Game rule configuration engine - browse rules, build configurations,
validate them and share them as modifications.

## Error Codes

| Code | Description |
|------|-------------|
| `CONFIGURATION_NOT_FOUND` | Configuration id does not exist |
| `RULE_NOT_FOUND` | Rule id is not registered |
| `PARSE_ERROR` | Imported text is not a valid configuration |
| `VALIDATION_ERROR` | Invalid request field or value |
| `INTERNAL_ERROR` | Unexpected server error |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Service instance
    if service is None:
        from ..games import install_builtin_rules
        service = APIService()
        installed = install_builtin_rules(service.engine, _builtin_pack_names())
        logger.info(f"Loaded rule packs: {', '.join(installed)}")
    api_service = service

    # =========================================================================
    # Error helpers
    # =========================================================================

    _NOT_FOUND_CODES = {ErrorCode.CONFIGURATION_NOT_FOUND, ErrorCode.RULE_NOT_FOUND}

    def make_error_response(error: ErrorResponse, status_code: Optional[int] = None) -> JSONResponse:
        """Create a standardized error response."""
        if status_code is None:
            status_code = 404 if error.error_code in _NOT_FOUND_CODES else 400
        return JSONResponse(status_code=status_code, content=error.model_dump(mode="json"))

    def respond(result: Any):
        if isinstance(result, ErrorResponse):
            return make_error_response(result)
        return result

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return make_error_response(
            ErrorResponse(error="Internal server error", error_code=ErrorCode.INTERNAL_ERROR),
            status_code=500,
        )

    # =========================================================================
    # Rule Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/games",
        response_model=GameTypesResponse,
        tags=["Rules"],
        summary="List game types with registered rules",
    )
    def list_game_types() -> GameTypesResponse:
        return api_service.list_game_types()

    @app.get(
        "/api/v1/games/{game_type}/rules",
        response_model=RuleListResponse,
        responses={400: {"model": ErrorResponse}},
        tags=["Rules"],
        summary="List the rules of a game",
    )
    def list_rules(
        game_type: str,
        category: Annotated[Optional[str], Query(description="Rule category filter")] = None,
    ) -> Union[RuleListResponse, JSONResponse]:
        return respond(api_service.list_rules(game_type, category))

    @app.get(
        "/api/v1/rules/{rule_id}",
        response_model=RuleInfo,
        responses={404: {"model": ErrorResponse}},
        tags=["Rules"],
        summary="Get a rule definition",
    )
    def get_rule(rule_id: str) -> Union[RuleInfo, JSONResponse]:
        return respond(api_service.get_rule(rule_id))

    # =========================================================================
    # Configuration Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/configurations",
        response_model=ConfigurationDocument,
        status_code=201,
        tags=["Configurations"],
        summary="Create a configuration with the game's default rules",
    )
    def create_configuration(body: CreateConfigurationRequest) -> ConfigurationDocument:
        return api_service.create_configuration(body)

    @app.get(
        "/api/v1/configurations",
        response_model=ConfigurationListResponse,
        tags=["Configurations"],
        summary="List configurations",
    )
    def list_configurations() -> ConfigurationListResponse:
        return api_service.list_configurations()

    # Declared before the {config_id} routes so "import" is not taken as an id
    @app.post(
        "/api/v1/configurations/import",
        response_model=ImportResponse,
        status_code=201,
        responses={400: {"model": ErrorResponse}},
        tags=["Sharing"],
        summary="Import an exported configuration",
    )
    async def import_configuration(request: Request) -> Union[ImportResponse, JSONResponse]:
        """
        Import configuration JSON (the body of a previous export).

        The configuration is stored under a new id with fresh timestamps.
        """
        data = await request.body()
        return respond(await run_in_threadpool(api_service.import_configuration, data))

    @app.get(
        "/api/v1/configurations/{config_id}",
        response_model=ConfigurationDocument,
        responses={404: {"model": ErrorResponse}},
        tags=["Configurations"],
        summary="Get a configuration",
    )
    def get_configuration(config_id: str) -> Union[ConfigurationDocument, JSONResponse]:
        return respond(api_service.get_configuration(config_id))

    @app.patch(
        "/api/v1/configurations/{config_id}",
        response_model=ConfigurationDocument,
        responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
        tags=["Configurations"],
        summary="Update configuration fields",
    )
    def update_configuration(
        config_id: str,
        body: UpdateConfigurationRequest,
    ) -> Union[ConfigurationDocument, JSONResponse]:
        return respond(api_service.update_configuration(config_id, body))

    @app.delete(
        "/api/v1/configurations/{config_id}",
        response_model=DeleteConfigurationResponse,
        tags=["Configurations"],
        summary="Delete a configuration",
    )
    def delete_configuration(config_id: str) -> DeleteConfigurationResponse:
        return api_service.delete_configuration(config_id)

    @app.post(
        "/api/v1/configurations/{config_id}/rules/{rule_id}",
        response_model=ConfigurationDocument,
        responses={404: {"model": ErrorResponse}},
        tags=["Configurations"],
        summary="Enable a rule",
    )
    def enable_rule(config_id: str, rule_id: str) -> Union[ConfigurationDocument, JSONResponse]:
        return respond(api_service.enable_rule(config_id, rule_id))

    @app.delete(
        "/api/v1/configurations/{config_id}/rules/{rule_id}",
        response_model=ConfigurationDocument,
        responses={404: {"model": ErrorResponse}},
        tags=["Configurations"],
        summary="Disable a rule and drop its overrides",
    )
    def disable_rule(config_id: str, rule_id: str) -> Union[ConfigurationDocument, JSONResponse]:
        return respond(api_service.disable_rule(config_id, rule_id))

    # =========================================================================
    # Parameter Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/configurations/{config_id}/rules/{rule_id}/parameters/{key}",
        response_model=ParameterValueResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Parameters"],
        summary="Effective parameter value",
    )
    def get_parameter(
        config_id: str, rule_id: str, key: str
    ) -> Union[ParameterValueResponse, JSONResponse]:
        return respond(api_service.get_parameter(config_id, rule_id, key))

    @app.put(
        "/api/v1/configurations/{config_id}/rules/{rule_id}/parameters/{key}",
        response_model=ParameterValueResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Parameters"],
        summary="Override a parameter value",
    )
    def set_parameter(
        config_id: str,
        rule_id: str,
        key: str,
        body: SetParameterRequest,
    ) -> Union[ParameterValueResponse, JSONResponse]:
        """
        Store an override. Out-of-range values are accepted here and
        reported by the validation endpoint.
        """
        return respond(api_service.set_parameter(config_id, rule_id, key, body.value))

    @app.delete(
        "/api/v1/configurations/{config_id}/rules/{rule_id}/parameters/{key}",
        response_model=ParameterValueResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Parameters"],
        summary="Reset a parameter to its default",
    )
    def reset_parameter(
        config_id: str, rule_id: str, key: str
    ) -> Union[ParameterValueResponse, JSONResponse]:
        return respond(api_service.reset_parameter(config_id, rule_id, key))

    # =========================================================================
    # Validation and Sharing Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/configurations/{config_id}/validation",
        response_model=ValidationResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Validation"],
        summary="Validate a configuration",
    )
    def validate_configuration(config_id: str) -> Union[ValidationResponse, JSONResponse]:
        return respond(api_service.validate(config_id))

    @app.get(
        "/api/v1/configurations/{config_id}/export",
        responses={404: {"model": ErrorResponse}},
        tags=["Sharing"],
        summary="Export a configuration as JSON",
    )
    def export_configuration(config_id: str):
        result = api_service.export_configuration(config_id)
        if isinstance(result, ErrorResponse):
            return make_error_response(result)
        return Response(content=result, media_type="application/json")

    @app.post(
        "/api/v1/configurations/{config_id}/modification",
        response_model=ModificationDocument,
        responses={404: {"model": ErrorResponse}},
        tags=["Sharing"],
        summary="Create a shareable modification",
    )
    def create_modification(config_id: str) -> Union[ModificationDocument, JSONResponse]:
        return respond(api_service.create_modification(config_id))

    @app.post(
        "/api/v1/modifications/apply",
        response_model=ImportResponse,
        status_code=201,
        tags=["Sharing"],
        summary="Apply a modification as a new configuration",
    )
    def apply_modification(
        body: Annotated[ModificationDocument, Body(description="Modification document")],
    ) -> ImportResponse:
        return api_service.apply_modification(body)

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get("/api/v1/health", response_model=HealthResponse, include_in_schema=False)
    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="ruleforge",
            version=__version__,
            environment=RULEFORGE_ENV,
            rule_count=len(api_service.engine.registry),
        )

    @app.get("/", tags=["System"])
    def root():
        """Root endpoint with API info."""
        return {
            "name": "RuleForge API",
            "version": __version__,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app
