"""
Connection settings for chclient.

ConnectionSettings is the property-style entry point of the configuration
layer: it collects the database, credentials, node preferences and free-form
option properties from environment variables and config files, then hands
them to the ConfigurationResolver.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..models import Credentials, NodeSelector
from ..types import Protocol
from .configuration import Configuration
from .resolver import ConfigurationResolver
from .settings_sources import create_config_sources


class ConnectionSettings(BaseSettings):
    """
    Settings used to build a client Configuration.

    Sources (in order of precedence):
    1. Runtime parameters passed to ``load``
    2. Configuration files (later files win)
    3. Environment variables (CHC_*)
    4. Default values

    Environment Variable Examples:
        CHC_DATABASE=system
        CHC_USER=default
        CHC_PASSWORD=secret
        CHC_OPTIONS='{"socket_timeout": "60000", "compress": "false"}'
        CHC_PREFERRED_PROTOCOLS='["http"]'
    """

    model_config = SettingsConfigDict(
        env_prefix='CHC_',
        case_sensitive=False,
        validate_default=True,
        extra='ignore',
        env_file=None,
    )

    database: Optional[str] = Field(
        default=None,
        description="Default database, overrides the 'database' option"
    )

    user: Optional[str] = Field(
        default=None,
        description="User name of the default credentials"
    )

    password: Optional[SecretStr] = Field(
        default=None,
        description="Password of the default credentials"
    )

    options: Dict[str, Any] = Field(
        default_factory=dict,
        description="Client options by key, values in their text form"
    )

    preferred_protocols: List[str] = Field(
        default_factory=list,
        description="Preferred protocols in order, e.g. ['http', 'grpc']"
    )

    preferred_tags: List[str] = Field(
        default_factory=list,
        description="Tags a node should carry"
    )

    @field_validator('options', mode='before')
    def validate_options(cls, v: Any) -> Any:
        """Drop None values; everything else is kept in text form."""
        if v is None:
            return {}
        if isinstance(v, dict):
            return {str(k): v[k] for k in v if k is not None and v[k] is not None}
        return v

    @classmethod
    def load(
        cls,
        config_files: Optional[List[Union[str, Path]]] = None,
        **override_values: Any
    ) -> 'ConnectionSettings':
        """
        Load settings from configuration files and runtime overrides.

        Args:
            config_files: YAML, TOML or JSON files, later files win
            **override_values: Runtime parameter overrides

        Returns:
            Loaded and validated settings
        """
        config_data: Dict[str, Any] = {}
        for source in create_config_sources(cls, config_files):
            file_data = source()
            if 'options' in file_data and 'options' in config_data:
                merged = dict(config_data['options'])
                merged.update(file_data['options'] or {})
                file_data = {**file_data, 'options': merged}
            config_data.update(file_data)

        config_data.update(override_values)
        return cls(**config_data)

    def to_properties(self) -> Dict[str, str]:
        """Flatten settings to string keyed option properties."""
        properties = {key: _to_text(value) for key, value in self.options.items()}
        if self.database is not None:
            properties['database'] = self.database
        return properties

    def to_credentials(self) -> Optional[Credentials]:
        """Credentials from user and password, None when no user is set."""
        if self.user is None:
            return None
        password = self.password.get_secret_value() if self.password else ""
        return Credentials.from_user_and_password(self.user, password)

    def to_node_selector(self) -> Optional[NodeSelector]:
        """Node selector from preferences, None when nothing is preferred."""
        if not self.preferred_protocols and not self.preferred_tags:
            return None
        protocols = [Protocol.from_scheme(p) for p in self.preferred_protocols]
        return NodeSelector.of(protocols, self.preferred_tags)

    def to_configuration(
        self,
        resolver: Optional[ConfigurationResolver] = None,
        metric_registry: Optional[Any] = None
    ) -> Configuration:
        """
        Build a configuration from these settings.

        Args:
            resolver: Resolver used to map option keys, a default one when None
            metric_registry: Optional metric registry handle

        Returns:
            New immutable configuration
        """
        resolver = resolver or ConfigurationResolver()
        return resolver.from_properties(
            self.to_properties(),
            credentials=self.to_credentials(),
            node_selector=self.to_node_selector(),
            metric_registry=metric_registry,
        )


def _to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
