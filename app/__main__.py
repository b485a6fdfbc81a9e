import uvicorn

from .config import Settings, setup_logging


def main():
    setup_logging()
    uvicorn.run(
        "app.main:create_app",
        factory=True,
        host=Settings.HOST,
        port=Settings.PORT,
        log_level=Settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
