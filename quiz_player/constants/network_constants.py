"""Network configuration constants for the quiz player."""

DEFAULT_HOST: str = "0.0.0.0"
DEFAULT_PORT: int = 8000
HTTP_TIMEOUT_SECONDS: float = 10.0
