import os
from dataclasses import dataclass, field
from dotenv import load_dotenv


def _flag(name: str, default: str = "0") -> bool:
	return os.getenv(name, default) in ("1", "true", "True")


@dataclass
class Settings:
	cors_origins: list[str] = field(default_factory=lambda: ["*"])
	log_level: str = "INFO"
	log_file: str | None = None
	http_timeout: float = 60.0
	proxy_base_url: str = "http://127.0.0.1:8000"
	github_webhook_secret: str | None = None
	gmail_verification_token: str | None = None
	workflow_run_delay: float = 2.0
	web_host: str = "127.0.0.1"
	web_port: int = 8000
	web_reload: bool = False


def _origins(raw: str) -> list[str]:
	raw = raw.strip()
	if raw == "*":
		return ["*"]
	return [o.strip() for o in raw.split(",") if o.strip()]


def _local_url(host: str, port: int) -> str:
	# a wildcard bind address is not something a client can connect to
	if host in ("", "0.0.0.0", "::"):
		host = "127.0.0.1"
	if ":" in host:
		host = f"[{host}]"
	return f"http://{host}:{port}"


def get_settings() -> Settings:
	# Load .env if present
	load_dotenv(override=False)
	web_host = os.getenv("WEB_HOST", "127.0.0.1")
	web_port = int(os.getenv("WEB_PORT", "8000"))
	return Settings(
		cors_origins=_origins(os.getenv("CORS_ORIGINS", "*")),
		log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
		log_file=os.getenv("LOG_FILE") or None,
		http_timeout=float(os.getenv("HTTP_TIMEOUT", "60")),
		proxy_base_url=(os.getenv("PROXY_BASE_URL") or _local_url(web_host, web_port)).rstrip("/"),
		github_webhook_secret=os.getenv("GITHUB_WEBHOOK_SECRET") or None,
		gmail_verification_token=os.getenv("GMAIL_VERIFICATION_TOKEN") or None,
		workflow_run_delay=float(os.getenv("WORKFLOW_RUN_DELAY", "2.0")),
		web_host=web_host,
		web_port=web_port,
		web_reload=_flag("WEB_RELOAD"),
	)
