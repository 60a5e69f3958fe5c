"""Build profiles and their per-profile compiler options."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from .cfg import CfgPredicate
from .errors import Error


class InvalidProfile(Error):
    """A profile name other than Debug or Release was given."""

    def __init__(self) -> None:
        super().__init__("invalid profile, only Debug/Release is supported")


class Profile(StrEnum):
    DEBUG = "Debug"
    RELEASE = "Release"


def parse_profile(profile: str) -> Profile:
    """Parse a profile name, ignoring case."""
    match profile.lower():
        case "debug":
            return Profile.DEBUG
        case "release":
            return Profile.RELEASE
    raise InvalidProfile()


@dataclass
class ProfileConfig:
    """Flags and sanitizer switches for one profile."""

    cxxflags: list[str] = field(default_factory=list)
    linkflags: list[str] = field(default_factory=list)
    definitions: list[str] = field(default_factory=list)
    ubsan: bool | None = None
    tsan: bool | None = None
    asan: bool | None = None
    leak: bool | None = None


@dataclass
class ConditionConfig:
    """A profile config that applies only when the condition holds."""

    condition: CfgPredicate
    config: ProfileConfig


@dataclass
class ProfileOptions:
    """Unconditional config plus the conditional ones for a profile."""

    config: ProfileConfig = field(default_factory=ProfileConfig)
    conditional_configs: list[ConditionConfig] = field(default_factory=list)