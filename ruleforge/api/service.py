"""
API Service - Business logic layer between the HTTP adapter and the engine.

The service:
1. Translates requests to engine calls
2. Turns unknown ids and parse failures into ErrorResponse values
3. Formats configurations, rules and validation results for clients

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

from ..engine_core import GameRuleEngine, ConfigurationNotFoundError
from ..rule_schema import RuleCategory
from ..sharing import ConfigurationParseError, ConfigurationDocument, ModificationDocument
from .schemas import (
    # Requests
    CreateConfigurationRequest,
    UpdateConfigurationRequest,
    # Responses
    ConfigurationListResponse,
    ConfigurationSummary,
    DeleteConfigurationResponse,
    ErrorResponse,
    GameTypesResponse,
    ImportResponse,
    ParameterValueResponse,
    RuleInfo,
    RuleListResponse,
    ValidationResponse,
    # Enums
    ErrorCode,
)


def _config_not_found(config_id: str) -> ErrorResponse:
    return ErrorResponse(
        error=f"Configuration {config_id} not found",
        error_code=ErrorCode.CONFIGURATION_NOT_FOUND,
        details={"config_id": config_id},
    )


def _rule_not_found(rule_id: str) -> ErrorResponse:
    return ErrorResponse(
        error=f"Rule {rule_id} not found",
        error_code=ErrorCode.RULE_NOT_FOUND,
        details={"rule_id": rule_id},
    )


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()
        install_builtin_rules(service.engine)

        config = service.create_configuration(request)
        service.set_parameter(config.game_id, "chess-board-size", "width", 10)
        result = service.validate(config.game_id)
    """
    engine: GameRuleEngine = field(default_factory=GameRuleEngine)

    # =========================================================================
    # Rules
    # =========================================================================

    def list_game_types(self) -> GameTypesResponse:
        game_types = self.engine.registry.list_game_types()
        return GameTypesResponse(game_types=game_types, count=len(game_types))

    def list_rules(self, game_type: str, category: str | None = None) -> RuleListResponse | ErrorResponse:
        if category is None:
            rules = self.engine.get_rules_for_game(game_type)
        else:
            try:
                RuleCategory(category)
            except ValueError:
                return ErrorResponse(
                    error=f"Unknown rule category: {category}",
                    error_code=ErrorCode.VALIDATION_ERROR,
                    details={"valid_categories": [c.value for c in RuleCategory]},
                )
            rules = self.engine.get_rules_by_category(game_type, category)

        return RuleListResponse(
            game_type=game_type,
            rules=[RuleInfo.from_rule(rule) for rule in rules],
            count=len(rules),
        )

    def get_rule(self, rule_id: str) -> RuleInfo | ErrorResponse:
        rule = self.engine.get_rule(rule_id)
        if rule is None:
            return _rule_not_found(rule_id)
        return RuleInfo.from_rule(rule)

    # =========================================================================
    # Configurations
    # =========================================================================

    def create_configuration(self, request: CreateConfigurationRequest) -> ConfigurationDocument:
        config = self.engine.create_configuration(
            request.base_game, request.name, request.description
        )
        return ConfigurationDocument.from_configuration(config)

    def list_configurations(self) -> ConfigurationListResponse:
        summaries = [
            ConfigurationSummary(
                config_id=config.game_id,
                name=config.name,
                base_game=config.base_game,
                active_rule_count=len(config.active_rules),
                modified=config.metadata.modified,
            )
            for config in self.engine.list_configurations()
        ]
        return ConfigurationListResponse(configurations=summaries, count=len(summaries))

    def get_configuration(self, config_id: str) -> ConfigurationDocument | ErrorResponse:
        config = self.engine.get_configuration(config_id)
        if config is None:
            return _config_not_found(config_id)
        return ConfigurationDocument.from_configuration(config)

    def update_configuration(
        self, config_id: str, request: UpdateConfigurationRequest
    ) -> ConfigurationDocument | ErrorResponse:
        if self.engine.get_configuration(config_id) is None:
            return _config_not_found(config_id)
        try:
            self.engine.update_configuration(config_id, request.updates())
        except (TypeError, ValueError) as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.VALIDATION_ERROR)
        return self.get_configuration(config_id)

    def delete_configuration(self, config_id: str) -> DeleteConfigurationResponse:
        success = self.engine.delete_configuration(config_id)
        return DeleteConfigurationResponse(success=success, config_id=config_id)

    def enable_rule(self, config_id: str, rule_id: str) -> ConfigurationDocument | ErrorResponse:
        """
        Activate a rule.

        Unregistered rule ids are accepted, as in the engine; validation
        reports them as unknown.
        """
        if self.engine.get_configuration(config_id) is None:
            return _config_not_found(config_id)
        self.engine.enable_rule(config_id, rule_id)
        return self.get_configuration(config_id)

    def disable_rule(self, config_id: str, rule_id: str) -> ConfigurationDocument | ErrorResponse:
        if self.engine.get_configuration(config_id) is None:
            return _config_not_found(config_id)
        self.engine.disable_rule(config_id, rule_id)
        return self.get_configuration(config_id)

    # =========================================================================
    # Parameters
    # =========================================================================

    def _check_parameter_target(self, config_id: str, rule_id: str) -> ErrorResponse | None:
        if self.engine.get_configuration(config_id) is None:
            return _config_not_found(config_id)
        if self.engine.get_rule(rule_id) is None:
            return _rule_not_found(rule_id)
        return None

    def get_parameter(self, config_id: str, rule_id: str, key: str) -> ParameterValueResponse | ErrorResponse:
        error = self._check_parameter_target(config_id, rule_id)
        if error:
            return error
        value = self.engine.get_rule_parameter_value(config_id, rule_id, key)
        return ParameterValueResponse(config_id=config_id, rule_id=rule_id, key=key, value=value)

    def set_parameter(
        self, config_id: str, rule_id: str, key: str, value: Any
    ) -> ParameterValueResponse | ErrorResponse:
        error = self._check_parameter_target(config_id, rule_id)
        if error:
            return error
        self.engine.set_rule_parameter(config_id, rule_id, key, value)
        return self.get_parameter(config_id, rule_id, key)

    def reset_parameter(self, config_id: str, rule_id: str, key: str) -> ParameterValueResponse | ErrorResponse:
        error = self._check_parameter_target(config_id, rule_id)
        if error:
            return error
        self.engine.reset_rule_parameter(config_id, rule_id, key)
        return self.get_parameter(config_id, rule_id, key)

    # =========================================================================
    # Validation, export and modifications
    # =========================================================================

    def validate(self, config_id: str) -> ValidationResponse | ErrorResponse:
        if self.engine.get_configuration(config_id) is None:
            return _config_not_found(config_id)
        result = self.engine.validate_configuration(config_id)
        return ValidationResponse.from_result(config_id, result)

    def export_configuration(self, config_id: str) -> str | ErrorResponse:
        try:
            return self.engine.export_configuration(config_id)
        except ConfigurationNotFoundError:
            return _config_not_found(config_id)

    def import_configuration(self, data: str | bytes) -> ImportResponse | ErrorResponse:
        try:
            config_id = self.engine.import_configuration(data)
        except ConfigurationParseError as e:
            return ErrorResponse(
                error=str(e),
                error_code=ErrorCode.PARSE_ERROR,
                details={"errors": e.errors},
            )
        return ImportResponse(config_id=config_id)

    def create_modification(self, config_id: str) -> ModificationDocument | ErrorResponse:
        try:
            mod = self.engine.create_game_modification(config_id)
        except ConfigurationNotFoundError:
            return _config_not_found(config_id)
        return ModificationDocument.from_modification(mod)

    def apply_modification(self, document: ModificationDocument) -> ImportResponse:
        config_id = self.engine.apply_game_modification(document.to_modification())
        return ImportResponse(config_id=config_id)
