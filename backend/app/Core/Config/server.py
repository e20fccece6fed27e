from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerConfig(BaseSettings):
    """Runtime settings read from the environment (and `.env` when present)."""

    host: str = "0.0.0.0"
    port: int = 7860
    reload: bool = False

    # Email relay
    resend_api_key: Optional[str] = None
    resend_api_url: str = "https://api.resend.com/emails"
    default_from_name: str = "BarberBook Pro"
    default_from_email: str = "onboarding@resend.dev"

    # TTS relay
    xfyun_appid: Optional[str] = None
    xfyun_api_key: Optional[str] = None
    xfyun_api_secret: Optional[str] = None
    xfyun_tts_url: str = "wss://tts-api.xfyun.cn/v2/tts"
    tts_timeout_seconds: float = 15.0
    tts_sample_rate: int = 16000

    # Booking store: Supabase when configured, local JSON file otherwise
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    booking_data_path: str = "resources/data/booking.json"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def use_supabase(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)
