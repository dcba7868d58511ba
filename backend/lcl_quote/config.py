from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # App
    environment: str = "development"
    log_level: str = "INFO"
    backend_host: str = "0.0.0.0"
    backend_port: int = 8000
    cors_allow_origins: list[str] = ["*"]
    default_locale: str = "en"

    # Lead store
    database_url: str = "sqlite+aiosqlite:///./leads.db"
    lead_store_backend: str = "database"  # "database" or "sheet_webhook"
    lead_sheet_webhook_url: str = ""
    lead_sheet_name: str = "Quote Leads"

    # Email (Resend)
    resend_api_key: str = ""
    resend_api_url: str = "https://api.resend.com/emails"
    customer_email_from: str = "Neubox Consolidation <quotes@neubox-consol.com>"
    internal_email_from: str = "Neubox System <noreply@neubox-consol.com>"
    operations_mailbox: str = "quotes@neubox-consol.com"

    # Requester IP lookup
    ip_lookup_url: str = "https://api.ipify.org?format=json"

    # Applies to every outbound call (IP lookup, lead store, email)
    outbound_timeout_seconds: float = 10.0

    # Pricing
    rate_table_path: str = ""
    rate_fallback_enabled: bool = True
    default_rate_per_cbm: float = 50.0
    default_rate_per_ton: float = 40.0
    quote_currency: str = "USD"

    # Port directory (empty = bundled sample directory)
    port_directory_path: str = ""

    # Attachments
    upload_dir: str = "./uploads"
    max_attachment_size_mb: int = 10
    allowed_attachment_types: set[str] = {"pdf", "doc", "docx", "jpeg", "jpg", "png", "xls", "xlsx"}

    # Contact email domains that are not accepted as company addresses
    personal_email_domains: set[str] = {
        "gmail.com",
        "yahoo.com",
        "hotmail.com",
        "outlook.com",
        "icloud.com",
        "protonmail.com",
    }

    # Sentry (optional)
    sentry_dsn: str = ""


settings = Settings()
