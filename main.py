import uvicorn

from config import AppSettings
from shared.logging import get_logger

log = get_logger(__name__)


def main() -> None:
    settings = AppSettings()
    host, port = settings.listen_host_port
    log.info("server_starting", url=f"http://{host}:{port}")
    uvicorn.run("asgi:app", host=host, port=port, log_config=None)


if __name__ == "__main__":
    main()
