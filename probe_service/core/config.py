from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "probe-service"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    GREETING: str = "Hello from probe-service!"
    # Name of the variable echoed by GET /env (read on every request)
    ENV_VAR_NAME: str = "APP_ENV"
    # Feature switches; with both off the service only serves static probes
    LIVENESS_TOGGLE_ENABLED: bool = True
    SHUTDOWN_ENDPOINT_ENABLED: bool = True
    # Shutdown settings
    SHUTDOWN_DELAY_SECONDS: float = 1.0
    SHUTDOWN_TIMEOUT_SECONDS: float = 5.0
    # Health check mode
    HEALTHCHECK_HOST: str = "127.0.0.1"
    HEALTHCHECK_TIMEOUT_SECONDS: float = 3.0

    class Config:
        env_file = ".env"


settings = Settings()
