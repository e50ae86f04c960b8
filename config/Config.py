# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-08
# Updated: 2026-02-02
# Description: Config
# -----------------------------------------------------------------------------

import os
from dataclasses import dataclass
from dotenv import load_dotenv, find_dotenv

# Load .env once globally
load_dotenv(find_dotenv(usecwd=True), override=False)


@dataclass(frozen=True)
class Config:
    # Firebase / Firestore (document source)
    firebase_service_account: str

    # OpenAI (query embeddings)
    openai_api_key: str
    openai_base_url: str = ""
    openai_embed_model: str = "text-embedding-3-small"

    # Azure OpenAI (optional alternative embedding endpoint)
    openai_azure_endpoint: str = ""
    openai_azure_api_version: str = "2024-10-21"

    # ---- Single source of truth: field_name -> ENV VAR NAME ----
    ENV_VARS = {
        "firebase_service_account": "FIREBASE_SERVICE_ACCOUNT",
        "openai_api_key": "OPENAI_API_KEY",
        "openai_base_url": "OPENAI_BASE_URL",
        "openai_embed_model": "OPENAI_EMBED_MODEL",
        "openai_azure_endpoint": "AZURE_OPENAI_ENDPOINT",
        "openai_azure_api_version": "AZURE_OPENAI_API_VERSION",
    }

    REQUIRED_FIELDS = (
        "firebase_service_account",
        "openai_api_key",
    )

    @staticmethod
    def from_env() -> "Config":
        """Build Config object from environment variables (unset optionals keep defaults)."""
        kwargs = {}
        for field_name, env_name in Config.ENV_VARS.items():
            value = (os.getenv(env_name) or "").strip()
            if value or field_name in Config.REQUIRED_FIELDS:
                kwargs[field_name] = value
        return Config(**kwargs)

    def __post_init__(self):
        """Fail fast if any required config is missing."""
        missing_fields = [f for f in self.REQUIRED_FIELDS if not getattr(self, f)]

        if missing_fields:
            missing_env_vars = [self.ENV_VARS[f] for f in missing_fields]
            raise ValueError(f"Missing required environment variables: {missing_env_vars}")

    @property
    def use_azure(self) -> bool:
        return bool(self.openai_azure_endpoint)

    def summary(self) -> dict:
        """Return a safe, non-sensitive summary for logging."""
        return {
            "openai_base_url": self.openai_base_url or "(default)",
            "openai_embed_model": self.openai_embed_model,
            "openai_azure_endpoint": self.openai_azure_endpoint or None,
            "firebase_service_account_set": bool(self.firebase_service_account),
        }
