# Copyright 2026 Justin Cook
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Runtime configuration, read from the environment.

Provider selection:
  RESUMEAI_PROVIDER   gemini (default) | vertex | openai
  RESUMEAI_MODEL      model id; defaults per provider

Credentials:
  GEMINI_API_KEY, GOOGLE_API_KEY or API_KEY for Gemini
  OPENAI_API_KEY for OpenAI
  Vertex uses ambient Google Cloud credentials (GOOGLE_CLOUD_PROJECT etc.)

CA bundle for proxy environments, in priority order:
  1. Explicit override via --ca-bundle
  2. REQUESTS_CA_BUNDLE
  3. CURL_CA_BUNDLE
  4. SSL_CERT_FILE
  5. System defaults
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

PROVIDERS = ("gemini", "vertex", "openai")

DEFAULT_MODELS = {
    "gemini": "gemini-2.5-flash",
    "vertex": "gemini-2.5-flash",
    "openai": "gpt-4o-mini",
}

CA_BUNDLE_ENV_VARS = ("REQUESTS_CA_BUNDLE", "CURL_CA_BUNDLE", "SSL_CERT_FILE")

# Set by the CLI --ca-bundle flag
_ca_bundle_override: Optional[str] = None


@dataclass
class Settings:
    provider: str = "gemini"
    model: str = DEFAULT_MODELS["gemini"]
    gemini_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None

    @property
    def api_key(self) -> Optional[str]:
        if self.provider == "openai":
            return self.openai_api_key
        return self.gemini_api_key


def load_settings(provider: Optional[str] = None, model: Optional[str] = None) -> Settings:
    """Builds Settings from the environment; explicit arguments win."""
    provider = (provider or os.environ.get("RESUMEAI_PROVIDER") or "gemini").lower()
    if provider not in PROVIDERS:
        raise ValueError(f"Unsupported provider: {provider}. Supported: {', '.join(PROVIDERS)}")

    gemini_key = (
        os.environ.get("GEMINI_API_KEY")
        or os.environ.get("GOOGLE_API_KEY")
        or os.environ.get("API_KEY")
    )
    settings = Settings(
        provider=provider,
        model=model or os.environ.get("RESUMEAI_MODEL") or DEFAULT_MODELS[provider],
        gemini_api_key=gemini_key,
        openai_api_key=os.environ.get("OPENAI_API_KEY"),
    )
    logger.debug(f"Loaded settings: provider={settings.provider} model={settings.model}")
    return settings


def set_ca_bundle_override(path: Optional[str]) -> None:
    global _ca_bundle_override
    _ca_bundle_override = path
    if path:
        logger.info(f"CA bundle override set to: {path}")


def ca_bundle_source() -> Tuple[Optional[str], Optional[str]]:
    """
    Where the CA bundle comes from, as (origin, path).

    origin is "--ca-bundle" for the CLI override or the name of the
    environment variable that supplied the path; (None, None) means the
    system trust store.
    """
    if _ca_bundle_override:
        return "--ca-bundle", _ca_bundle_override
    for var in CA_BUNDLE_ENV_VARS:
        if os.environ.get(var):
            return var, os.environ[var]
    return None, None


def get_ca_bundle() -> str | bool:
    """Value for requests' `verify=`: a bundle path, or True for the system store."""
    origin, path = ca_bundle_source()
    if path is None:
        return True
    logger.debug(f"Using CA bundle from {origin}: {path}")
    return path


def configure_ssl_env() -> None:
    # google-genai and openai go through httpx, which only reads SSL_CERT_FILE
    origin, path = ca_bundle_source()
    if path is None or os.environ.get("SSL_CERT_FILE") == path:
        return
    os.environ["SSL_CERT_FILE"] = path
    logger.debug(f"Exported CA bundle from {origin} as SSL_CERT_FILE={path}")
