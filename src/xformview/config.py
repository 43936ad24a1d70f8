#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

from pathlib import Path
from typing import Optional

import yaml
from pydantic import Field
from pydantic_settings import SettingsConfigDict

from .auth import AuthConfig
from .defaults import (
    DEFAULT_API_URL,
    DEFAULT_CONFIG_PATH,
    DEFAULT_DEBOUNCE_WINDOW,
    DEFAULT_PAGE_SIZE,
    DEFAULT_PAGE_SIZE_OPTIONS,
    DEFAULT_TIMEOUT,
)


class ViewerConfig(AuthConfig):
    """Transform viewer configuration.

    Args:
        api_url: URL of the cluster providing the transform API.
        page_size: Page size used if the location does not specify one.
        debounce_window: Debounce window for list fetches in seconds.
        timeout: Timeout for remote calls in seconds.
    """

    model_config = SettingsConfigDict(
        env_prefix="XFORMVIEW_",
        extra="forbid",
    )

    api_url: Optional[str] = None
    page_size: int = DEFAULT_PAGE_SIZE
    debounce_window: float = Field(default=DEFAULT_DEBOUNCE_WINDOW, ge=0)
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)

    @classmethod
    def create(
        cls,
        *,
        config: Optional["ViewerConfig"] = None,
        config_path: Optional[Path | str] = None,
        **config_kwargs,
    ) -> "ViewerConfig":
        # 0. from defaults
        config_dict = cls.get_default().to_dict()

        # 1. from file
        file_config = cls.from_file(config_path=config_path)
        if file_config is not None:
            config_dict.update(file_config.to_dict())

        # 2. from env
        env_config = cls()
        config_dict.update(env_config.to_dict())

        # 3. from config
        if config is not None:
            config_dict.update(config.to_dict())

        # 4. from kwargs
        config_dict.update(config_kwargs)

        return cls(**config_dict)

    @classmethod
    def from_file(
        cls, config_path: Optional[str | Path] = None
    ) -> Optional["ViewerConfig"]:
        config_path_: Path = cls.normalize_config_path(config_path)
        if not config_path_.exists():
            return None
        with config_path_.open("rt") as stream:
            config_dict = yaml.safe_load(stream)
        if not config_dict:
            return None
        return ViewerConfig(**config_dict)

    def write(self, config_path: Optional[str | Path] = None) -> Path:
        config_path = self.normalize_config_path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with config_path.open("wt") as stream:
            yaml.dump(
                self.model_dump(mode="json", by_alias=True, exclude_none=True), stream
            )
        return config_path

    @classmethod
    def normalize_config_path(cls, config_path) -> Path:
        return (
            config_path
            if isinstance(config_path, Path)
            else (Path(config_path) if config_path else DEFAULT_CONFIG_PATH)
        )

    def to_dict(self):
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
            exclude_defaults=True,
            exclude_unset=True,
        )

    @property
    def effective_page_size(self) -> int:
        """The configured page size if it is a valid option, else the default."""
        if self.page_size in DEFAULT_PAGE_SIZE_OPTIONS:
            return self.page_size
        return DEFAULT_PAGE_SIZE

    @classmethod
    def get_default(cls) -> "ViewerConfig":
        """Get the configuration default values."""
        return ViewerConfig(**_DEFAULT_CONFIG.to_dict())

    @classmethod
    def set_default(cls, default_config: "ViewerConfig") -> "ViewerConfig":
        """Set the configuration default values.

        Args:
            default_config: A configuration object providing the defaults.
        Return:
            The previous defaults.
        """
        global _DEFAULT_CONFIG
        prev_default_config = _DEFAULT_CONFIG
        _DEFAULT_CONFIG = ViewerConfig(**default_config.to_dict())
        return prev_default_config


_DEFAULT_CONFIG: ViewerConfig = ViewerConfig(api_url=DEFAULT_API_URL)
