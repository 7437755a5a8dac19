from __future__ import annotations

import subprocess
import sys

from dotenv import load_dotenv

from relay_hub.config import get_settings


def run_web_ui(host: str, port: int, reload: bool):
    # Run FastAPI app (webapp.py) via uvicorn
    args = [
        sys.executable,
        "-m",
        "uvicorn",
        "webapp:app",
        "--host",
        host,
        "--port",
        str(port),
    ]
    if reload:
        args.append("--reload")
    return subprocess.Popen(args)


def main():
    load_dotenv(override=True)
    settings = get_settings()
    web = run_web_ui(settings.web_host, settings.web_port, settings.web_reload)
    print("Relay Hub is running:")
    print(f"- API: http://{settings.web_host}:{settings.web_port}/api")
    try:
        web.wait()
    except KeyboardInterrupt:
        web.terminate()


if __name__ == "__main__":
    main()
