"""Transcript defaults configurable via environment variables."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import field_validator
from pydantic_settings import BaseSettings

from shared.validators import StringListEnvSettingsSource, parse_string_list
from transcript.logic.events import EventRules
from transcript.logic.seats import PlayerLocation

if TYPE_CHECKING:
    from pydantic_settings.sources.base import PydanticBaseSettingsSource


class TranscriptSettings(BaseSettings):
    model_config = {"env_prefix": "TRANSCRIPT_"}

    # seats, relative to the caller, a chii may be claimed from.
    # TRANSCRIPT_CHII_SOURCES accepts a JSON array or a comma-separated list.
    chii_sources: list[str] = ["left"]

    @field_validator("chii_sources", mode="before")
    @classmethod
    def validate_chii_sources(cls, v: str | list[str]) -> list[str]:
        names = [name.lower() for name in parse_string_list(v)]
        unknown = [name for name in names if name.upper() not in PlayerLocation.__members__]
        if unknown:
            raise ValueError(f"Unknown seat name(s) in chii_sources: {unknown}")
        if PlayerLocation.HERO.name.lower() in names:
            raise ValueError("chii_sources cannot include the caller's own seat")
        return names

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return init_settings, StringListEnvSettingsSource(settings_cls), dotenv_settings, file_secret_settings

    def to_event_rules(self) -> EventRules:
        return EventRules(chii_sources=frozenset(PlayerLocation[name.upper()] for name in self.chii_sources))
