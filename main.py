import signal
import sys

import uvicorn

from storefront.core.config import load_settings
from storefront.utils.exceptions import ConfigError


if __name__ == "__main__":
    """
    Entry point for the storefront API.
    """
    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    reload = settings.environment == "development"

    print("Starting storefront API...")
    print(f"Environment: {settings.environment}")
    print(f"Listening on http://{settings.host}:{settings.port}")
    print("Press CTRL+C to stop the server")

    # Handle graceful shutdown on SIGINT (Ctrl+C) and SIGTERM
    def signal_handler(sig, frame):
        print("\n\nShutdown signal received. Stopping server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    if hasattr(signal, "SIGTERM"):
        signal.signal(signal.SIGTERM, signal_handler)

    try:
        # Single worker: stores are in process memory
        uvicorn.run(
            "web.main:create_app",
            factory=True,
            host=settings.host,
            port=settings.port,
            reload=reload,
            log_level="debug" if reload else "info",
        )
    except KeyboardInterrupt:
        print("\n\nShutdown complete.")
