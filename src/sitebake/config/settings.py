"""Runtime settings — CLI flags and env vars in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``SITEBAKE_*`` prefix
  3. Code defaults

Site settings (folders, templates, render flags) do not live here: they
are keys of the :class:`~sitebake.config.store.LayeredStore` loaded from
``sitebake.toml``. These settings only say where the project is and how
the CLI should talk.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from sitebake.config.configuration import BakeConfiguration
from sitebake.config.discovery import ConfigFileError, find_config, load_store


class BakeSettings(BaseSettings):
    """Unified runtime settings for the sitebake CLI.

    Attributes:
        source_root: Project source directory (parent of ``sitebake.toml``,
            or CWD if no config found).
        config_path: Project config file, or None when running on defaults.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "SITEBAKE_",
    }

    source_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    verbose: bool = False
    log_json: bool = False

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """CLI flags over env vars; no dotenv or secrets files."""
        return (init_settings, env_settings)

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        source_root: Path | None = None,
        **cli_flags: Any,
    ) -> BakeSettings:
        """Construct settings from CLI invocation.

        Discovers ``sitebake.toml`` via walk-up (or explicit *config_path*),
        resolves *source_root* from the config file's parent directory,
        and merges CLI flags as highest-priority overrides.
        """
        toml_path: Path | None = None
        if config_path:
            toml_path = Path(config_path)
            if not toml_path.is_file():
                msg = f"Config file not found: {config_path}"
                raise ConfigFileError(msg)
        else:
            toml_path = find_config(source_root)

        resolved_root = source_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        return cls(
            source_root=resolved_root,
            config_path=toml_path,
            **cli_flags,
        )

    def build_configuration(self) -> BakeConfiguration:
        """Load the layered store and resolve folders against ``source_root``.

        Discovery already happened in :meth:`from_cli`; a None
        ``config_path`` means the project runs on packaged defaults.
        """
        store = load_store(self.config_path, discover=False)
        return BakeConfiguration(self.source_root.resolve(), store)
