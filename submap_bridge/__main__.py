# submap_bridge/__main__.py
import uvicorn

from . import config as C


def main():
    C.configure_logging()
    uvicorn.run(
        "submap_bridge.app:app",
        host=C.HOST,
        port=C.PORT,
        log_level=C.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
