"""Job configuration.

A job is either a simple download of one URI or a scrape of a listing. Both
come in through the CLI flags or through a JSON config file; either way they
end up as a validated `GatherConfig`.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Annotated, Dict, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, Field, ValidationError, field_validator

from gather.core.errors import ConfigError, PatternError
from gather.core.scraping.matcher import compile_pattern


class SimpleJob(BaseModel):
    """Download the content of a single URI."""

    kind: Literal["simple"] = "simple"
    uri: str = Field(validation_alias=AliasChoices("uri", "host"))

    @field_validator("uri")
    def uri_not_blank(cls, v):
        if not v.strip():
            raise ValueError("uri must not be empty")
        return v


class ScrapeJob(BaseModel):
    """Scrape `uri` for names matching `pattern` and download the selection."""

    kind: Literal["scrape"] = "scrape"
    uri: str = Field(validation_alias=AliasChoices("uri", "host"))
    pattern: str
    # Free-form on purpose: unknown values select a placeholder, see selector.
    which: str = Field(default="all", validation_alias=AliasChoices("which", "policy"))

    @field_validator("uri")
    def uri_not_blank(cls, v):
        if not v.strip():
            raise ValueError("uri must not be empty")
        return v

    @field_validator("pattern")
    def pattern_must_compile(cls, v):
        try:
            compile_pattern(v)
        except PatternError as exc:
            raise ValueError(exc.reason) from exc
        return v


Job = Annotated[Union[SimpleJob, ScrapeJob], Field(discriminator="kind")]


class GatherConfig(BaseModel):
    """Everything one gather run needs."""

    save_as: str
    job: Job
    timeout: Optional[float] = Field(default=None, gt=0)

    @field_validator("save_as")
    def save_as_not_blank(cls, v):
        if not v.strip():
            raise ValueError("save_as must not be empty")
        return v


def time_vars(now: Optional[datetime] = None) -> Dict[str, str]:
    """Variables available to config files, taken from `now` (UTC by default)."""
    now = now or datetime.now(timezone.utc)
    return {
        "Year": f"{now.year:04d}",
        "Month": f"{now.month:02d}",
        "Day": f"{now.day:02d}",
        "Hour": f"{now.hour:02d}",
        "Minute": f"{now.minute:02d}",
        "Second": f"{now.second:02d}",
    }


def replace_time(contents: str, now: Optional[datetime] = None) -> str:
    """Replace every `$Year`, `$Month`, ... in `contents` with its value."""
    for name, value in time_vars(now).items():
        contents = contents.replace(f"${name}", value)
    return contents


def parse_config(data: dict) -> GatherConfig:
    try:
        return GatherConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc


def load_config(path: str, now: Optional[datetime] = None) -> GatherConfig:
    """Read a JSON config file, substitute time variables and validate it."""
    try:
        contents = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"couldn't read config file {path}: {exc}") from exc

    try:
        data = json.loads(replace_time(contents, now))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"config file {path} is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"config file {path} must hold a JSON object")
    return parse_config(data)
