"""Configuration for the workflow dispatcher.

Configuration is loaded once at startup from:
- environment variables
- and a local `.env` file (if present)

The resulting values are passed explicitly into the client and the service;
nothing below the CLI entrypoint reads the process environment.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DispatcherSettings(BaseSettings):
    """Settings for the dispatch command.

    Environment variables:
    - GITHUB_TOKEN                      (required)
    - CI                                (optional, any value disables prompting)
    - GITHUB_BASE_URL                   (optional)
    - DISPATCH_REPOSITORY               (optional)
    - DISPATCH_WORKFLOWS_ROOT           (optional)
    - DISPATCH_AUTHENTICATE_DISCOVERY   (optional)
    - LOG_LEVEL                         (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `DispatcherSettings(_env_file=path_to_env)`.
    """

    # The default is empty so `DispatcherSettings()` type-checks; validation below
    # enforces that a token is actually provided.
    github_token: str = Field(
        default="",
        validation_alias="GITHUB_TOKEN",
        description="GitHub token used to authorize workflow dispatches",
    )
    ci: str = Field(
        default="",
        validation_alias="CI",
        description="Set by CI providers; any non-empty value marks a non-interactive run",
    )
    github_base_url: str = Field(
        default="https://api.github.com",
        validation_alias="GITHUB_BASE_URL",
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )

    repository: str = Field(
        default="expo/expo",
        validation_alias="DISPATCH_REPOSITORY",
        description="Repository whose workflows are dispatched, in the form 'owner/repo'",
    )
    workflows_root: Path | None = Field(
        default=None,
        validation_alias="DISPATCH_WORKFLOWS_ROOT",
        description=(
            "Root of the local checkout that workflow paths are resolved against. "
            "Defaults to the top level of the git checkout containing the working directory."
        ),
    )
    authenticate_discovery: bool = Field(
        default=False,
        validation_alias="DISPATCH_AUTHENTICATE_DISCOVERY",
        description=(
            "Send the token with the workflow listing request too. "
            "By default only the dispatch request is authenticated."
        ),
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @model_validator(mode="after")
    def _require_github_auth(self) -> DispatcherSettings:
        if not self.github_token.strip():
            raise ValueError("Environment variable `GITHUB_TOKEN` must be set.")
        return self

    @model_validator(mode="after")
    def _require_owner_and_repo(self) -> DispatcherSettings:
        owner, _, name = self.repository.strip().partition("/")
        if not owner or not name or "/" in name:
            raise ValueError("DISPATCH_REPOSITORY must be in the form 'owner/repo'")
        return self

    @property
    def non_interactive(self) -> bool:
        """Whether interactive prompts are disabled (running on CI)."""

        return bool(self.ci.strip())
