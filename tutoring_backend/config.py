from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


# ================== SETTINGS ==================
class Settings(BaseSettings):
    # Secrets, no defaults: the app refuses to start without them
    GMAIL_USER: str
    GMAIL_PASS: str
    TWILIO_ACCOUNT_SID: str
    TWILIO_AUTH_TOKEN: str
    TWILIO_PHONE_NUMBER: str
    SESSIONS_PASSWORD_HASH: str

    DATABASE_URL: str = "sqlite:///./bookings.db"
    UPLOAD_DIR: str = "uploads"

    MAIL_SERVER: str = "smtp.gmail.com"
    MAIL_PORT: int = 587

    BUSINESS_NAME: str = "From 1 to 7 Tutoring"
    TUTOR_NAME: str = "Mdu Mataboge"
    TUTOR_EMAIL: Optional[str] = None
    TUTOR_PHONE: str = "+27766440806"
    MEET_LINK: str = "https://meet.google.com/vee-wxwv-nof"

    PORT: int = 3000
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/errors.log"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="allow"
    )

    @property
    def tutor_mailbox(self) -> str:
        return self.TUTOR_EMAIL or self.GMAIL_USER


settings = Settings()
