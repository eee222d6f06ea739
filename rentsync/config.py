"""
Configurazione dell'applicazione / Application configuration.
Usa pydantic-settings per caricare da .env o variabili d'ambiente.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "RentSync AI"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = True

    # Database - SQLite in memoria: lo stato vive quanto il processo
    # Database - in-memory SQLite: state lives as long as the process
    DATABASE_URL: str = "sqlite+aiosqlite://"

    # CORS - origini autorizzate / allowed origins
    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Sessione (JWT) / Session (JWT)
    SECRET_KEY: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 720

    # Rate Limiting
    RATE_LIMIT_LOGIN: str = "10/minute"
    RATE_LIMIT_AI: str = "20/minute"

    # Accesso agenzia / Agency access
    AGENCY_PASSWORD: str = "admin123"
    ALLOW_EMPTY_AGENCY_PASSWORD: bool = True
    DEMO_LOGIN_ENABLED: bool = True

    # Magic link agenti / Agent magic link
    PUBLIC_BASE_URL: str = "http://localhost:5173"
    QR_SERVICE_URL: str = "https://quickchart.io/qr"

    # Gemini
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-3-flash-preview"

    # Dati demo all'avvio / Demo data on startup
    SEED_DEMO_DATA: bool = True

    # Politica di cancellazione: "cascade" o "orphan" / Delete policy: "cascade" or "orphan"
    CLIENT_DELETE_POLICY: str = "cascade"
    CAR_DELETE_POLICY: str = "orphan"
    AGENT_DELETE_POLICY: str = "orphan"

    # Parametri commerciali / Commercial parameters
    VAT_RATE: float = 0.22
    DEFAULT_RISK_SCORE: int = 50
    DEFAULT_COMMISSION_RATE: float = 10.0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
