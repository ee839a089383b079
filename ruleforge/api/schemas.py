"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between HTTP clients and the engine.
Configurations and modifications reuse the shareable wire documents
(camelCase keys); everything else is snake_case.

Error Codes:
- CONFIGURATION_NOT_FOUND: Configuration id is unknown
- RULE_NOT_FOUND: Rule id is unknown
- PARSE_ERROR: Imported text is not a valid configuration or modification
- VALIDATION_ERROR: Request body or field names are invalid
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field

from ..rule_schema import GameRule, RuleParameter, NumberParameter, SelectParameter, ValidationResult


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
    CONFIGURATION_NOT_FOUND = "CONFIGURATION_NOT_FOUND"
    RULE_NOT_FOUND = "RULE_NOT_FOUND"
    PARSE_ERROR = "PARSE_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Rule Models
# =============================================================================

class OptionInfo(BaseModel):
    value: Any
    label: str


class ParameterInfo(BaseModel):
    """A rule parameter as shown to editors."""
    key: str
    name: str
    type: str
    default_value: Any = None
    description: str = ""
    required: bool = False
    category: str = ""
    live_preview: bool = False
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None
    options: Optional[list[OptionInfo]] = None

    @classmethod
    def from_parameter(cls, param: RuleParameter) -> "ParameterInfo":
        info = cls(
            key=param.key,
            name=param.name,
            type=param.type.value,
            default_value=param.default_value,
            description=param.description,
            required=param.required,
            category=param.category,
            live_preview=param.live_preview,
        )
        if isinstance(param, NumberParameter):
            info.min, info.max, info.step = param.min, param.max, param.step
        elif isinstance(param, SelectParameter):
            info.options = [OptionInfo(value=o.value, label=o.label) for o in param.options]
        return info


class RuleInfo(BaseModel):
    """Rule definition."""
    id: str
    name: str
    description: str = ""
    category: str
    game_type: str
    parameters: list[ParameterInfo] = Field(default_factory=list)
    dependencies: list[str] = Field(default_factory=list)
    conflicts: list[str] = Field(default_factory=list)
    priority: int = 0
    tags: list[str] = Field(default_factory=list)
    version: str = "1.0.0"
    author: Optional[str] = None

    @classmethod
    def from_rule(cls, rule: GameRule) -> "RuleInfo":
        return cls(
            id=rule.id,
            name=rule.name,
            description=rule.description,
            category=rule.category.value,
            game_type=rule.game_type,
            parameters=[ParameterInfo.from_parameter(p) for p in rule.parameters],
            dependencies=list(rule.dependencies),
            conflicts=list(rule.conflicts),
            priority=rule.priority,
            tags=list(rule.tags),
            version=rule.version,
            author=rule.author,
        )


class RuleListResponse(BaseModel):
    game_type: str
    rules: list[RuleInfo]
    count: int


class GameTypesResponse(BaseModel):
    game_types: list[str]
    count: int


# =============================================================================
# Configuration Models
# =============================================================================

class CreateConfigurationRequest(BaseModel):
    """Request to create a configuration for a base game."""
    base_game: str = Field(..., min_length=1, description="Game type, e.g. 'chess'")
    name: str = Field(..., min_length=1)
    description: str = ""


class UpdateConfigurationRequest(BaseModel):
    """Partial update; only the provided fields change."""
    name: Optional[str] = None
    description: Optional[str] = None
    base_game: Optional[str] = None
    metadata: Optional[dict[str, Any]] = None

    def updates(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class SetParameterRequest(BaseModel):
    value: Any = Field(..., description="New value, validated lazily")


class ConfigurationSummary(BaseModel):
    config_id: str
    name: str
    base_game: str
    active_rule_count: int
    modified: str


class ConfigurationListResponse(BaseModel):
    configurations: list[ConfigurationSummary]
    count: int


class DeleteConfigurationResponse(BaseModel):
    success: bool
    config_id: str


class ParameterValueResponse(BaseModel):
    config_id: str
    rule_id: str
    key: str
    value: Any = None


class ValidationResponse(BaseModel):
    """Validation outcome for a configuration."""
    config_id: str
    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)

    @classmethod
    def from_result(cls, config_id: str, result: ValidationResult) -> "ValidationResponse":
        return cls(
            config_id=config_id,
            valid=result.valid,
            errors=list(result.errors),
            warnings=list(result.warnings),
            suggestions=list(result.suggestions),
        )


class ImportResponse(BaseModel):
    """Id of the configuration created by an import or a modification."""
    config_id: str


# =============================================================================
# System Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
    environment: str
    rule_count: int
