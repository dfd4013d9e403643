"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, mailctl.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class SeedAccount(BaseModel):
    """One demonstration account created when a store starts."""

    model_config = {"frozen": True}

    username: str
    password: str


DEFAULT_SEED_ACCOUNTS: tuple[SeedAccount, ...] = (
    SeedAccount(username="user1", password="1234"),
    SeedAccount(username="user2", password="1234"),
)

DEFAULT_ONBOARDING_QUESTIONS: tuple[str, ...] = (
    "Email",
    "Birthday",
    "Credit card number",
    "Expiry date",
    "The three digits on the back (more information)",
    "Social security number",
    "Mothers maiden name",
    "League of legends username",
)


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    seed_accounts: list[SeedAccount] = Field(
        default_factory=lambda: list(DEFAULT_SEED_ACCOUNTS)
    )


class ShellConfig(BaseModel):
    """[shell] section.

    Onboarding answers are asked for and thrown away; they never reach the store.
    """

    model_config = {"frozen": True}

    banner: str = "Mail app in python"
    onboarding: bool = True
    onboarding_questions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ONBOARDING_QUESTIONS)
    )
    end_marker: str = "END"
