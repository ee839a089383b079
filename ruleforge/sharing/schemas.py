"""
Pydantic documents for the shareable wire formats.

These models define the exact JSON shape of exported configurations and
modifications (camelCase keys), independent of the engine's dataclasses.
Parsing through them is what rejects malformed imports.

Non-finite override values are written as the JSON constants NaN and
Infinity rather than null, so an invalid value stays invalid after a
round trip.
"""

import copy
from dataclasses import asdict
from typing import Any, Optional
from pydantic import BaseModel, Field

from ..rule_schema import (
    AssetType,
    ConfigurationMetadata,
    CustomAsset,
    GameConfiguration,
    GameModification,
    ModificationMetadata,
    ModifiedRule,
)


class AssetDocument(BaseModel):
    id: str
    name: str
    type: AssetType
    data: str
    metadata: Optional[dict[str, Any]] = None

    model_config = {"from_attributes": True}

    @classmethod
    def from_asset(cls, asset: CustomAsset) -> "AssetDocument":
        return cls(
            id=asset.id,
            name=asset.name,
            type=asset.type,
            data=asset.data,
            metadata=asset.metadata,
        )

    def to_asset(self) -> CustomAsset:
        return CustomAsset(
            id=self.id,
            name=self.name,
            type=self.type,
            data=self.data,
            metadata=dict(self.metadata) if self.metadata is not None else None,
        )


class ConfigurationMetadataDocument(BaseModel):
    version: str = "1.0.0"
    author: str = "User"
    created: str = ""
    modified: str = ""
    tags: list[str] = Field(default_factory=list)
    featured: Optional[bool] = None

    model_config = {"from_attributes": True}


class ConfigurationDocument(BaseModel):
    """Serialized GameConfiguration."""
    game_id: str = Field(alias="gameId")
    name: str
    description: str = ""
    base_game: str = Field(alias="baseGame")
    active_rules: list[str] = Field(alias="activeRules")
    rule_overrides: dict[str, dict[str, Any]] = Field(default_factory=dict, alias="ruleOverrides")
    custom_assets: list[AssetDocument] = Field(default_factory=list, alias="customAssets")
    metadata: ConfigurationMetadataDocument

    model_config = {"populate_by_name": True, "from_attributes": True, "ser_json_inf_nan": "constants"}

    @classmethod
    def from_configuration(cls, config: GameConfiguration) -> "ConfigurationDocument":
        return cls(
            game_id=config.game_id,
            name=config.name,
            description=config.description,
            base_game=config.base_game,
            active_rules=list(config.active_rules),
            rule_overrides=config.rule_overrides,
            custom_assets=[AssetDocument.from_asset(asset) for asset in config.custom_assets],
            metadata=ConfigurationMetadataDocument(**asdict(config.metadata)),
        )

    def to_configuration(self) -> GameConfiguration:
        return GameConfiguration(
            game_id=self.game_id,
            name=self.name,
            description=self.description,
            base_game=self.base_game,
            active_rules=list(dict.fromkeys(self.active_rules)),
            rule_overrides={
                rule_id: dict(values) for rule_id, values in self.rule_overrides.items()
            },
            custom_assets=[asset.to_asset() for asset in self.custom_assets],
            metadata=ConfigurationMetadata(**self.metadata.model_dump()),
        )

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict; optional keys that are unset are left out."""
        data = self.model_dump(by_alias=True, mode="json")
        if data["metadata"].get("featured") is None:
            data["metadata"].pop("featured", None)
        for asset in data["customAssets"]:
            if asset.get("metadata") is None:
                asset.pop("metadata", None)
        return data


class ModifiedRuleDocument(BaseModel):
    rule_id: str = Field(alias="ruleId")
    enabled: bool = True
    parameters: dict[str, Any] = Field(default_factory=dict)

    model_config = {"populate_by_name": True, "from_attributes": True, "ser_json_inf_nan": "constants"}


class ModificationMetadataDocument(BaseModel):
    author: str = "User"
    version: str = "1.0.0"
    created: str = ""
    downloads: int = 0
    rating: float = 0
    tags: list[str] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class ModificationDocument(BaseModel):
    """Serialized GameModification."""
    id: str
    name: str
    description: str = ""
    base_game_id: str = Field(alias="baseGameId")
    rules: list[ModifiedRuleDocument]
    assets: list[AssetDocument] = Field(default_factory=list)
    levels: Optional[list[Any]] = None
    metadata: ModificationMetadataDocument = Field(default_factory=ModificationMetadataDocument)

    model_config = {"populate_by_name": True, "from_attributes": True, "ser_json_inf_nan": "constants"}

    @classmethod
    def from_modification(cls, mod: GameModification) -> "ModificationDocument":
        return cls(
            id=mod.id,
            name=mod.name,
            description=mod.description,
            base_game_id=mod.base_game_id,
            rules=[
                ModifiedRuleDocument(
                    rule_id=rule.rule_id,
                    enabled=rule.enabled,
                    parameters=rule.parameters,
                )
                for rule in mod.rules
            ],
            assets=[AssetDocument.from_asset(asset) for asset in mod.assets],
            levels=mod.levels,
            metadata=ModificationMetadataDocument(**asdict(mod.metadata)),
        )

    def to_modification(self) -> GameModification:
        return GameModification(
            id=self.id,
            name=self.name,
            description=self.description,
            base_game_id=self.base_game_id,
            rules=[
                ModifiedRule(
                    rule_id=rule.rule_id,
                    enabled=rule.enabled,
                    parameters=dict(rule.parameters),
                )
                for rule in self.rules
            ],
            assets=[asset.to_asset() for asset in self.assets],
            levels=copy.deepcopy(self.levels),
            metadata=ModificationMetadata(**self.metadata.model_dump()),
        )

    def to_wire(self) -> dict[str, Any]:
        data = self.model_dump(by_alias=True, mode="json")
        for asset in data["assets"]:
            if asset.get("metadata") is None:
                asset.pop("metadata", None)
        if data["levels"] is None:
            data.pop("levels")
        return data
