from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Trading platform (Bisq REST API; default matches a local daemon)
    PLATFORM_API_URL: str = "http://localhost:8080"
    PLATFORM_MARKET_PAIR: str = "btc_eth"
    PLATFORM_TRADE_CURRENCIES: list[str] = ["BTC", "ETH"]
    PLATFORM_SELECTED_CURRENCY: str = "ETH"
    PLATFORM_PAYMENT_METHOD: str = "BLOCK_CHAINS"
    PLATFORM_BUYER_SECURITY_DEPOSIT: int = 1  # platform minimum

    # Blockchain explorer (Ethplorer)
    LEDGER_API_URL: str = "https://api.ethplorer.io"
    LEDGER_API_KEY: str = "freekey"
    LEDGER_NORMALIZE_ADDRESSES: bool = False  # exact string match unless enabled

    # None = block until the remote side answers or the transport fails
    HTTP_TIMEOUT_SECONDS: float | None = None

    # App
    APP_NAME: str = "P2P Offer Matcher"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = None


settings = Settings()
