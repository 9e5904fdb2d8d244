# src/stampgen/config/const.py
from __future__ import annotations

# Defaults baked into the tool; settings files and env may override them
DEFAULT_VERSION_ENV: str = "STAMPGEN_PKG_VERSION"
DEFAULT_FORMAT: str = "directive"
DEFAULT_DIRECTIVE: str = "cargo:rustc-env"
DEFAULT_LOG_LEVEL: str = "WARNING"

SETTINGS_FILENAME: str = "stampgen.yaml"
SETTINGS_PATH_ENV: str = "STAMPGEN_CONFIG"

# Reproducible builds, see https://reproducible-builds.org/specs/source-date-epoch/
SOURCE_DATE_EPOCH_ENV: str = "SOURCE_DATE_EPOCH"

# Environment overrides understood by Settings.from_sources; kept apart from
# the emitted STAMPGEN_BUILD_* names
ENV_BUILD_ENABLED: str = "STAMPGEN_BUILD_ENABLED"
ENV_BUILD_TIMESTAMP: str = "STAMPGEN_TIMESTAMP_ENABLED"
ENV_BUILD_TIMEZONE: str = "STAMPGEN_TIMEZONE"
ENV_BUILD_KIND: str = "STAMPGEN_TIMESTAMP_KIND"
ENV_BUILD_SEMVER: str = "STAMPGEN_SEMVER_ENABLED"
ENV_VERSION_ENV: str = "STAMPGEN_VERSION_ENV"
ENV_SOURCE_DATE_EPOCH: str = "STAMPGEN_SOURCE_DATE_EPOCH"
ENV_FORMAT: str = "STAMPGEN_FORMAT"
ENV_DIRECTIVE: str = "STAMPGEN_DIRECTIVE"
ENV_LOG_LEVEL: str = "STAMPGEN_LOG_LEVEL"

# stampgen's own release metadata; never the emitted STAMPGEN_BUILD_* names
ENV_SELF_VERSION: str = "STAMPGEN_SELF_VERSION"
ENV_SELF_BUILD_DATE: str = "STAMPGEN_SELF_BUILD_DATE"
