"""
Tests for export/import and modifications.

Tests:
- Export shape (camelCase, indentation, optional keys)
- Import assigns a new id and fresh timestamps
- Parse errors for malformed or incomplete documents
- Modification round trip
"""

import json
import math

import pytest

from ..engine_core import ConfigurationNotFoundError
from ..rule_schema import AssetType, CustomAsset, GameModification, ModifiedRule
from ..sharing import ConfigurationParseError, dump_configuration, load_configuration


class TestExport:
    """Tests for export_configuration."""

    def test_export_is_camel_case(self, demo_engine, demo_config):
        """Exported keys use camelCase."""
        data = json.loads(demo_engine.export_configuration(demo_config.game_id))

        assert data["gameId"] == demo_config.game_id
        assert data["baseGame"] == "demo"
        assert data["activeRules"] == ["r1", "r4"]
        assert data["ruleOverrides"] == {}
        assert data["customAssets"] == []
        assert data["metadata"]["author"] == "User"

    def test_export_indented(self, demo_engine, demo_config):
        """Export uses two-space indentation."""
        text = demo_engine.export_configuration(demo_config.game_id)
        assert text.startswith('{\n  "gameId"')

    def test_optional_keys_omitted(self, demo_engine, demo_config):
        """Unset featured flag and asset metadata are left out."""
        demo_config.custom_assets.append(
            CustomAsset(id="a1", name="Board", type=AssetType.SPRITE, data="data:...")
        )
        data = json.loads(demo_engine.export_configuration(demo_config.game_id))

        assert "featured" not in data["metadata"]
        assert data["customAssets"] == [
            {"id": "a1", "name": "Board", "type": "sprite", "data": "data:..."}
        ]

    def test_export_unknown_raises(self, engine):
        """Exporting an unknown id raises ConfigurationNotFoundError."""
        with pytest.raises(ConfigurationNotFoundError):
            engine.export_configuration("missing")

    def test_not_found_is_key_error(self, engine):
        """Callers catching KeyError also catch the not-found error."""
        with pytest.raises(KeyError):
            engine.create_game_modification("missing")


class TestImport:
    """Tests for import_configuration."""

    def test_round_trip(self, demo_engine, demo_config):
        """Import reproduces rules, overrides and metadata under a new id."""
        demo_engine.enable_rule(demo_config.game_id, "r2")
        demo_engine.set_rule_parameter(demo_config.game_id, "r1", "x", 0)
        demo_engine.update_configuration(demo_config.game_id, {"metadata": {"tags": ["t"], "featured": True}})
        demo_config.custom_assets.append(CustomAsset(
            id="a1", name="Board", type=AssetType.SPRITE, data="data:...",
            metadata={"width": 64, "tint": "#ff0000"},
        ))

        new_id = demo_engine.import_configuration(demo_engine.export_configuration(demo_config.game_id))
        imported = demo_engine.get_configuration(new_id)

        assert new_id != demo_config.game_id
        assert new_id.startswith("imported-")
        assert imported.active_rules == demo_config.active_rules
        assert imported.rule_overrides == {"r1": {"x": 0}}
        assert imported.metadata.tags == ["t"]
        assert imported.metadata.featured is True
        assert imported.custom_assets == demo_config.custom_assets

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_override_survives(self, demo_engine, demo_config, value):
        """Non-finite overrides stay invalid after export and import."""
        message = "Invalid parameter 'X' in rule 'R1': Must be a number"
        demo_engine.set_rule_parameter(demo_config.game_id, "r1", "x", value)
        assert message in demo_engine.validate_configuration(demo_config.game_id).errors

        new_id = demo_engine.import_configuration(demo_engine.export_configuration(demo_config.game_id))
        imported = demo_engine.get_configuration(new_id).rule_overrides["r1"]["x"]
        result = demo_engine.validate_configuration(new_id)

        assert isinstance(imported, float)
        assert (math.isnan(imported) if math.isnan(value) else imported == value)
        assert message in result.errors
        assert not result.valid

    def test_non_finite_written_as_constant(self, demo_engine, demo_config):
        """Export writes NaN rather than null."""
        demo_engine.set_rule_parameter(demo_config.game_id, "r1", "x", float("nan"))
        text = demo_engine.export_configuration(demo_config.game_id)

        assert '"x": NaN' in text

    def test_import_resets_timestamps(self, demo_engine):
        """Imported configurations get the current time."""
        text = json.dumps({
            "gameId": "old",
            "name": "Old",
            "baseGame": "demo",
            "activeRules": [],
            "metadata": {"created": "2000-01-01T00:00:00.000Z", "modified": "2000-01-01T00:00:00.000Z"},
        })
        imported = demo_engine.get_configuration(demo_engine.import_configuration(text))

        assert imported.metadata.created == "2025-01-01T12:00:00.000Z"
        assert imported.metadata.modified == "2025-01-01T12:00:00.000Z"

    def test_import_does_not_touch_original(self, demo_engine, demo_config):
        """The source configuration is unaffected by later edits to the copy."""
        new_id = demo_engine.import_configuration(demo_engine.export_configuration(demo_config.game_id))
        demo_engine.disable_rule(new_id, "r1")

        assert "r1" in demo_config.active_rules

    def test_duplicate_active_rules_collapsed(self):
        """Duplicate ids in activeRules keep their first position."""
        config = load_configuration(json.dumps({
            "gameId": "g",
            "name": "G",
            "baseGame": "demo",
            "activeRules": ["a", "b", "a"],
            "metadata": {},
        }))
        assert config.active_rules == ["a", "b"]

    @pytest.mark.parametrize("text", [
        "not json",
        "[]",
        '{"name": "x"}',
        '{"gameId": "g", "name": "G", "baseGame": "demo", "metadata": {}}',
        '{"gameId": "g", "name": "G", "baseGame": "demo", "activeRules": "r1", "metadata": {}}',
    ])
    def test_malformed_rejected(self, engine, text):
        """Malformed JSON or missing/mistyped fields raise ConfigurationParseError."""
        with pytest.raises(ConfigurationParseError):
            engine.import_configuration(text)

    def test_parse_error_lists_fields(self, engine):
        """The error names the missing field."""
        with pytest.raises(ConfigurationParseError) as exc_info:
            engine.import_configuration('{"gameId": "g", "name": "G", "baseGame": "demo", "metadata": {}}')

        assert any("activeRules" in e for e in exc_info.value.errors)
        assert isinstance(exc_info.value, ValueError)

    def test_failed_import_stores_nothing(self, engine):
        """A rejected import leaves the store unchanged."""
        with pytest.raises(ConfigurationParseError):
            engine.import_configuration("{")
        assert engine.list_configurations() == []

    def test_dump_load_equivalent(self, demo_config):
        """Serializer functions round-trip a configuration."""
        assert load_configuration(dump_configuration(demo_config)) == demo_config


class TestModifications:
    """Tests for create_game_modification and apply_game_modification."""

    def test_create_modification(self, demo_engine, demo_config):
        """A modification lists active rules with their overrides only."""
        demo_engine.enable_rule(demo_config.game_id, "r2")
        demo_engine.set_rule_parameter(demo_config.game_id, "r1", "x", 5)

        mod = demo_engine.create_game_modification(demo_config.game_id)

        assert mod.base_game_id == "demo"
        assert mod.name == demo_config.name
        assert [(r.rule_id, r.enabled, r.parameters) for r in mod.rules] == [
            ("r1", True, {"x": 5}),
            ("r4", True, {}),
            ("r2", True, {}),
        ]
        assert mod.metadata.downloads == 0
        assert mod.metadata.rating == 0

    def test_modification_is_a_copy(self, demo_engine, demo_config):
        """Later edits to the configuration do not leak into the modification."""
        demo_engine.set_rule_parameter(demo_config.game_id, "r1", "x", 5)
        mod = demo_engine.create_game_modification(demo_config.game_id)
        demo_engine.set_rule_parameter(demo_config.game_id, "r1", "x", 6)

        assert mod.rules[0].parameters == {"x": 5}

    def test_round_trip(self, demo_engine, demo_config):
        """Applying a created modification reproduces rules and overrides."""
        demo_engine.enable_rule(demo_config.game_id, "r2")
        demo_engine.disable_rule(demo_config.game_id, "r4")
        demo_engine.set_rule_parameter(demo_config.game_id, "r1", "x", 5)

        mod = demo_engine.create_game_modification(demo_config.game_id)
        new_id = demo_engine.apply_game_modification(mod)
        applied = demo_engine.get_configuration(new_id)

        assert new_id != demo_config.game_id
        assert applied.active_rules == ["r1", "r2"]
        assert applied.rule_overrides == {"r1": {"x": 5}}
        assert demo_engine.validate_configuration(new_id).valid

    def test_disabled_rules_skipped(self, demo_engine):
        """Rules marked disabled are neither activated nor overridden."""
        mod = GameModification(
            id="mod-1",
            name="Shared",
            base_game_id="demo",
            rules=[
                ModifiedRule(rule_id="r2"),
                ModifiedRule(rule_id="r3", enabled=False, parameters={"p": 1}),
            ],
        )
        applied = demo_engine.get_configuration(demo_engine.apply_game_modification(mod))

        assert applied.active_rules == ["r2"]
        assert applied.rule_overrides == {}
        assert applied.name == "Shared"

    def test_modification_text_round_trip(self, demo_engine, demo_config):
        """Modifications survive export/import as text."""
        demo_engine.set_rule_parameter(demo_config.game_id, "r1", "x", 5)
        mod = demo_engine.create_game_modification(demo_config.game_id)

        text = demo_engine.export_modification(mod)
        data = json.loads(text)

        assert data["baseGameId"] == "demo"
        assert data["rules"][0] == {"ruleId": "r1", "enabled": True, "parameters": {"x": 5}}
        assert demo_engine.import_modification(text) == mod

    def test_invalid_modification_text(self, engine):
        """Malformed modification text raises ConfigurationParseError."""
        with pytest.raises(ConfigurationParseError):
            engine.import_modification('{"id": "m"}')

    def test_levels_carried_as_is(self, demo_engine):
        """Game-specific level data survives export and import untouched."""
        levels = [{"name": "1-1", "platforms": [[0, 10, 4]], "goal": None}]
        mod = GameModification(
            id="mod-levels", name="Levels", base_game_id="demo",
            rules=[ModifiedRule(rule_id="r2")], levels=levels,
        )

        text = demo_engine.export_modification(mod)
        restored = demo_engine.import_modification(text)

        assert json.loads(text)["levels"] == levels
        assert restored.levels == levels

    def test_levels_omitted_when_unset(self, demo_engine, demo_config):
        """Modifications without level data export no levels key."""
        mod = demo_engine.create_game_modification(demo_config.game_id)
        assert "levels" not in json.loads(demo_engine.export_modification(mod))
