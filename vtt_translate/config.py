"""Configuration constants, translator defaults, and .env loading.

WHY: Centralizes the configurable values (endpoint, API version, default
target language, credentials) so they are easy to find and override
without touching the client or CLI logic.

HOW: python-dotenv loads the .env file on import. Constants are
module-level strings overridable by environment variables.
load_credentials() gives a clear error when the Azure resource key or
region is missing.

RULES:
- Credentials come from the environment (or .env), never hardcoded
- All defaults can be overridden via environment variables
- CLI flags take precedence over the environment
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Translator API configuration defaults
# ---------------------------------------------------------------------------

AZURE_TRANSLATOR_ENDPOINT = os.getenv(
    "AZURE_TRANSLATOR_ENDPOINT", "https://api.cognitive.microsofttranslator.com"
)
AZURE_TRANSLATOR_API_VERSION = os.getenv("AZURE_TRANSLATOR_API_VERSION", "3.0")
DEFAULT_TARGET_LANGUAGE = os.getenv("DEFAULT_TARGET_LANGUAGE", "fa")

KEY_ENV_VAR = "AZURE_TRANSLATION_RESOURCE_KEY"
REGION_ENV_VAR = "AZURE_TRANSLATION_RESOURCE_REGION"


def load_credentials(
    key: str | None = None,
    region: str | None = None,
) -> tuple[str, str]:
    """Resolve the Azure Translator resource key and region.

    WHY: Every translator request is authenticated with the resource key
    and routed by region. Failing before any file work gives a clear
    message instead of a 401 from the API.

    HOW: Explicit arguments win; otherwise the environment variables
    (populated by python-dotenv) are used.

    RULES:
    - Raises ValueError if either value is missing or blank
    - Never returns a placeholder value
    """
    key = (key or os.getenv(KEY_ENV_VAR, "")).strip()
    region = (region or os.getenv(REGION_ENV_VAR, "")).strip()
    if not key:
        raise ValueError(
            "Azure Translator key not configured. "
            "Pass --azure-resource-key or set {} in the .env file.".format(KEY_ENV_VAR)
        )
    if not region:
        raise ValueError(
            "Azure Translator region not configured. "
            "Pass --azure-resource-region or set {} in the .env file.".format(REGION_ENV_VAR)
        )
    return key, region
