from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = "sqlite+pysqlite:///./invoicedesk.db"
    secret_key: str = "change-me"
    debug: bool = False
    log_level: str = "INFO"
    default_currency: str = "EUR"
    vat_rates: list[int] = [0, 5, 9, 21]

    model_config = SettingsConfigDict(env_file=".env", env_prefix="")


settings = Settings()
