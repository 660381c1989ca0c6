"""
Configuration settings for the hostdesk property-management backend.
"""
import os
from typing import Dict, Optional
from dataclasses import dataclass
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _optional_float(name: str) -> Optional[float]:
    value = os.getenv(name, "")
    return float(value) if value else None


@dataclass
class SupabaseConfig:
    """Supabase configuration settings."""
    url: str = os.getenv("SUPABASE_URL", "")
    anon_key: str = os.getenv("SUPABASE_ANON_KEY", "")
    service_role_key: str = os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")

    def get_auth_key(self) -> str:
        """Prefer service role key for server-side operations when available."""
        return self.service_role_key or self.anon_key


@dataclass
class ProxyConfig:
    """Serverless proxy endpoints fronting the third-party APIs."""
    functions_url: str = os.getenv("SUPABASE_FUNCTIONS_URL", "")
    krossbooking_function: str = os.getenv("KROSSBOOKING_PROXY_NAME", "krossbooking-proxy")
    gsheet_function: str = os.getenv("GSHEET_PROXY_NAME", "gsheet-proxy")
    page_manager_function: str = os.getenv("PAGE_MANAGER_PROXY_NAME", "page-manager-proxy")
    # None keeps the HTTP client's default
    timeout_seconds: Optional[float] = _optional_float("PROXY_TIMEOUT_SECONDS")

    def endpoint(self, function_name: str) -> str:
        """Full URL of a proxy function."""
        base = self.functions_url or (
            f"{supabase_config.url.rstrip('/')}/functions/v1" if supabase_config.url else ""
        )
        return f"{base.rstrip('/')}/{function_name}"


@dataclass
class AppConfig:
    """Application configuration settings."""
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Supabase table names
    user_rooms_table: str = "user_rooms"
    profiles_table: str = "profiles"

    # Spreadsheet defaults
    default_sheet_range: str = os.getenv("DEFAULT_SHEET_RANGE", "Sheet1!A1:Z100")
    default_write_range: str = "Sheet1!A1"

    # Rooms shown by the CLI when none are given, comma separated "id:name"
    cli_rooms: str = os.getenv("HOSTDESK_ROOMS", "")

    # Event type -> display priority for day lists
    event_priorities: Dict[str, int] = None

    def __post_init__(self):
        if self.event_priorities is None:
            self.event_priorities = {
                "check_in": 1,
                "check_in_out": 2,
                "check_out": 3,
                "task": 4,
                "stay": 5,
            }


supabase_config = SupabaseConfig()
proxy_config = ProxyConfig()
app_config = AppConfig()
