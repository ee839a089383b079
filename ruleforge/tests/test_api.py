"""
Tests for API layer.

Tests:
- API service methods
- Error responses for unknown ids and bad input
- Configuration lifecycle via API
"""

import inspect
import json

import pytest

from ..api.schemas import (
    CreateConfigurationRequest,
    UpdateConfigurationRequest,
    ErrorCode,
    ErrorResponse,
)
from ..api.service import APIService
from ..games import install_builtin_rules


class TestAPIService:
    """Tests for APIService."""

    @pytest.fixture
    def service(self, engine):
        """API service over an engine with every built-in pack."""
        install_builtin_rules(engine)
        return APIService(engine=engine)

    @pytest.fixture
    def chess_config(self, service):
        return service.create_configuration(
            CreateConfigurationRequest(base_game="chess", name="My Chess")
        )

    def test_list_game_types(self, service):
        """Game types of every installed pack are listed."""
        response = service.list_game_types()

        assert response.game_types == ["chess", "tictactoe", "platformer"]
        assert response.count == 3

    def test_list_rules(self, service):
        """Rules come back with parameter details."""
        response = service.list_rules("chess")

        assert response.count == 8
        board = response.rules[0]
        assert board.id == "chess-board-size"
        assert board.category == "gameplay"
        assert board.parameters[0].type == "number"
        assert board.parameters[0].max == 12

    def test_list_rules_by_category(self, service):
        """The category filter narrows the list."""
        response = service.list_rules("chess", "movement")
        assert [r.id for r in response.rules] == ["chess-piece-movement", "chess-special-moves"]

    def test_list_rules_bad_category(self, service):
        """Unknown categories are a validation error."""
        response = service.list_rules("chess", "teleport")

        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.VALIDATION_ERROR

    def test_get_rule_select_options(self, service):
        """Select parameters expose their options."""
        rule = service.get_rule("chess-ai-behavior")
        difficulty = rule.parameters[0]

        assert difficulty.type == "select"
        assert difficulty.options[0].value == "beginner"

    def test_get_unknown_rule(self, service):
        """Unknown rule ids give RULE_NOT_FOUND."""
        response = service.get_rule("nope")
        assert response.error_code == ErrorCode.RULE_NOT_FOUND

    def test_create_configuration(self, chess_config):
        """New configurations carry the default rules."""
        assert chess_config.name == "My Chess"
        assert chess_config.base_game == "chess"
        assert len(chess_config.active_rules) == 4

    def test_get_unknown_configuration(self, service):
        """Unknown configuration ids give CONFIGURATION_NOT_FOUND."""
        response = service.get_configuration("missing")

        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.CONFIGURATION_NOT_FOUND
        assert response.details == {"config_id": "missing"}

    def test_update_configuration(self, service, chess_config):
        """Only provided fields change."""
        response = service.update_configuration(
            chess_config.game_id,
            UpdateConfigurationRequest(name="Renamed", metadata={"author": "Ada"}),
        )

        assert response.name == "Renamed"
        assert response.description == ""
        assert response.metadata.author == "Ada"
        assert response.metadata.created != ""

    def test_update_bad_metadata(self, service, chess_config):
        """Unknown metadata keys are a validation error."""
        response = service.update_configuration(
            chess_config.game_id,
            UpdateConfigurationRequest(metadata={"stars": 5}),
        )
        assert response.error_code == ErrorCode.VALIDATION_ERROR

    def test_enable_and_disable_rule(self, service, chess_config):
        """Rules can be toggled through the service."""
        enabled = service.enable_rule(chess_config.game_id, "chess-time-control")
        assert "chess-time-control" in enabled.active_rules

        disabled = service.disable_rule(chess_config.game_id, "chess-time-control")
        assert "chess-time-control" not in disabled.active_rules

    def test_parameter_lifecycle(self, service, chess_config):
        """Set, read and reset a parameter."""
        config_id = chess_config.game_id

        assert service.get_parameter(config_id, "chess-board-size", "width").value == 8
        assert service.set_parameter(config_id, "chess-board-size", "width", 10).value == 10
        assert service.reset_parameter(config_id, "chess-board-size", "width").value == 8

    def test_parameter_unknown_rule(self, service, chess_config):
        """Parameters of unknown rules give RULE_NOT_FOUND."""
        response = service.set_parameter(chess_config.game_id, "nope", "x", 1)
        assert response.error_code == ErrorCode.RULE_NOT_FOUND

    def test_validate(self, service, chess_config):
        """Out-of-range values show up in the validation response."""
        service.set_parameter(chess_config.game_id, "chess-board-size", "width", 99)
        response = service.validate(chess_config.game_id)

        assert response.valid is False
        assert "Must be at most 12" in response.errors[0]

    def test_export_import(self, service, chess_config):
        """Exported text imports as a new configuration."""
        text = service.export_configuration(chess_config.game_id)
        response = service.import_configuration(text)

        assert response.config_id != chess_config.game_id
        assert service.get_configuration(response.config_id).name == "My Chess"

    def test_import_parse_error(self, service):
        """Bad import text gives PARSE_ERROR with details."""
        response = service.import_configuration(json.dumps({"name": "x"}))

        assert response.error_code == ErrorCode.PARSE_ERROR
        assert response.details["errors"]

    def test_modification_round_trip(self, service, chess_config):
        """A created modification applies as a new configuration."""
        service.set_parameter(chess_config.game_id, "chess-board-size", "height", 10)
        mod = service.create_modification(chess_config.game_id)
        response = service.apply_modification(mod)

        applied = service.get_configuration(response.config_id)
        assert applied.active_rules == chess_config.active_rules
        assert applied.rule_overrides == {"chess-board-size": {"height": 10}}

    def test_delete_configuration(self, service, chess_config):
        """Deleting reports whether anything was removed."""
        assert service.delete_configuration(chess_config.game_id).success is True
        assert service.delete_configuration(chess_config.game_id).success is False
        assert service.list_configurations().count == 2  # tic-tac-toe and platformer defaults


class TestHTTPApp:
    """Tests for the FastAPI application."""

    @pytest.fixture
    def client(self, engine):
        pytest.importorskip("fastapi")
        pytest.importorskip("httpx")
        from fastapi.testclient import TestClient
        from ..api.app import create_app

        install_builtin_rules(engine, ["chess"])
        return TestClient(create_app(APIService(engine=engine)))

    def test_health(self, client):
        """Health check reports the rule count."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["rule_count"] == 8

    def test_configuration_flow(self, client):
        """Create, edit, validate and export over HTTP."""
        created = client.post("/api/v1/configurations", json={"base_game": "chess", "name": "HTTP"})
        assert created.status_code == 201
        config_id = created.json()["gameId"]

        response = client.put(
            f"/api/v1/configurations/{config_id}/rules/chess-board-size/parameters/width",
            json={"value": 20},
        )
        assert response.json()["value"] == 20

        validation = client.get(f"/api/v1/configurations/{config_id}/validation").json()
        assert validation["valid"] is False

        exported = client.get(f"/api/v1/configurations/{config_id}/export")
        assert exported.json()["ruleOverrides"] == {"chess-board-size": {"width": 20}}

        imported = client.post("/api/v1/configurations/import", content=exported.content)
        assert imported.status_code == 201
        assert imported.json()["config_id"] != config_id

    def test_not_found_is_404(self, client):
        """Unknown ids map to 404 with an error code."""
        response = client.get("/api/v1/configurations/missing")

        assert response.status_code == 404
        assert response.json()["error_code"] == "CONFIGURATION_NOT_FOUND"

    def test_import_parse_error_is_400(self, client):
        """Malformed import text maps to 400."""
        response = client.post("/api/v1/configurations/import", content=b"{not json")

        assert response.status_code == 400
        assert response.json()["error_code"] == "PARSE_ERROR"

    def test_apply_modification(self, client):
        """A modification document applies as a new configuration."""
        body = {
            "id": "mod-1",
            "name": "Big Board",
            "baseGameId": "chess",
            "rules": [{"ruleId": "chess-board-size", "parameters": {"width": 10}}],
        }
        response = client.post("/api/v1/modifications/apply", json=body)
        assert response.status_code == 201

        config = client.get(f"/api/v1/configurations/{response.json()['config_id']}").json()
        assert config["activeRules"] == ["chess-board-size"]
        assert config["ruleOverrides"] == {"chess-board-size": {"width": 10}}

    def test_engine_endpoints_are_sync(self, client):
        """Endpoints calling the engine run on the thread pool, not the event loop."""
        from fastapi.routing import APIRoute

        async_endpoints = [
            route.path for route in client.app.routes
            if isinstance(route, APIRoute) and inspect.iscoroutinefunction(route.endpoint)
        ]
        assert async_endpoints == ["/api/v1/configurations/import"]
