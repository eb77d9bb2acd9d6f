from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv


DEFAULT_CSP = (
    "default-src 'self'; "
    "font-src 'self' https://gassisstant-web-hook.vercel.app; "
    "style-src 'self' 'unsafe-inline'; "
    "script-src 'self';"
)


def _default_env_file() -> str:
    repo_root = Path(__file__).resolve().parents[1]
    return str(repo_root / ".env")


def _split_csv(raw: str) -> Tuple[str, ...]:
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def _optional(raw: Optional[str]) -> Optional[str]:
    if raw is None:
        return None
    raw = raw.strip()
    return raw or None


@dataclass(frozen=True)
class FirebaseSettings:
    project_id: Optional[str] = None
    client_email: Optional[str] = None
    private_key: Optional[str] = None
    database_url: Optional[str] = None


@dataclass(frozen=True)
class MoistureLayoutSettings:
    primary_path: str = "monitor"
    primary_field: Optional[str] = "SoilMoisture"
    fallback_path: str = "SoilMoisture"
    fallback_field: Optional[str] = None


@dataclass(frozen=True)
class DeviceSettings:
    device_id: str = "soil-moisture-sensor-1"
    name: str = "Soil Moisture Sensor"
    nicknames: Tuple[str, ...] = ("plant sensor", "garden sensor")
    default_names: Tuple[str, ...] = ("Soil Moisture Sensor",)
    room_hint: Optional[str] = "Garden"
    agent_user_id: str = "greenthumb-user"
    manufacturer: str = "GreenThumb"
    model: str = "soil-moisture-v1"


@dataclass(frozen=True)
class OAuthSettings:
    store_backend: str = "memory"
    code_ttl_seconds: int = 600
    token_ttl_seconds: int = 3600


@dataclass(frozen=True)
class Settings:
    store_backend: str = "memory"
    redis_url: str = "redis://localhost:6379/0"
    firebase: FirebaseSettings = field(default_factory=FirebaseSettings)
    layout: MoistureLayoutSettings = field(default_factory=MoistureLayoutSettings)
    device: DeviceSettings = field(default_factory=DeviceSettings)
    oauth: OAuthSettings = field(default_factory=OAuthSettings)

    query_keywords: Tuple[str, ...] = ()
    cors_allow_origins: Tuple[str, ...] = ("*",)
    content_security_policy: str = DEFAULT_CSP
    fonts_dir: Optional[str] = None
    log_level: str = "INFO"


def get_settings() -> Settings:
    # Load env file (if present) but still allow overriding via real environment variables.
    env_file = os.getenv("WEBHOOK_ENV_FILE", _default_env_file())
    if env_file and Path(env_file).exists():
        load_dotenv(env_file, override=False)

    firebase = FirebaseSettings(
        project_id=_optional(os.getenv("FIREBASE_PROJECT_ID")),
        client_email=_optional(os.getenv("FIREBASE_CLIENT_EMAIL")),
        private_key=_optional(os.getenv("FIREBASE_PRIVATE_KEY")),
        database_url=_optional(os.getenv("FIREBASE_DATABASE_URL")),
    )

    # Deployments differ: some store {"monitor": {"SoilMoisture": n}},
    # others a flat "SoilMoisture" or "moistureLevel" number.
    layout = MoistureLayoutSettings(
        primary_path=os.getenv("MOISTURE_PRIMARY_PATH", "monitor"),
        primary_field=_optional(os.getenv("MOISTURE_PRIMARY_FIELD", "SoilMoisture")),
        fallback_path=os.getenv("MOISTURE_FALLBACK_PATH", "SoilMoisture"),
        fallback_field=_optional(os.getenv("MOISTURE_FALLBACK_FIELD")),
    )

    device_name = os.getenv("DEVICE_NAME", "Soil Moisture Sensor")
    device = DeviceSettings(
        device_id=os.getenv("DEVICE_ID", "soil-moisture-sensor-1"),
        name=device_name,
        nicknames=_split_csv(os.getenv("DEVICE_NICKNAMES", "plant sensor,garden sensor")),
        default_names=(device_name,),
        room_hint=_optional(os.getenv("DEVICE_ROOM_HINT", "Garden")),
        agent_user_id=os.getenv("AGENT_USER_ID", "greenthumb-user"),
        manufacturer=os.getenv("DEVICE_MANUFACTURER", "GreenThumb"),
        model=os.getenv("DEVICE_MODEL", "soil-moisture-v1"),
    )

    oauth = OAuthSettings(
        store_backend=os.getenv("OAUTH_STORE_BACKEND", "memory").strip().lower(),
        code_ttl_seconds=int(os.getenv("OAUTH_CODE_TTL_SECONDS", "600")),
        token_ttl_seconds=int(os.getenv("OAUTH_TOKEN_TTL_SECONDS", "3600")),
    )

    return Settings(
        store_backend=os.getenv("MOISTURE_STORE_BACKEND", "memory").strip().lower(),
        redis_url=os.getenv("REDIS_URL", "redis://localhost:6379/0"),
        firebase=firebase,
        layout=layout,
        device=device,
        oauth=oauth,
        query_keywords=tuple(k.lower() for k in _split_csv(os.getenv("FULFILLMENT_QUERY_KEYWORDS", ""))),
        cors_allow_origins=_split_csv(os.getenv("CORS_ALLOW_ORIGINS", "*")) or ("*",),
        content_security_policy=os.getenv("CONTENT_SECURITY_POLICY", DEFAULT_CSP),
        fonts_dir=_optional(os.getenv("FONTS_DIR")),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
    )
