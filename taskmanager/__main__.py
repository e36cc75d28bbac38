import uvicorn

from taskmanager.config import settings


def main() -> None:
    uvicorn.run(
        "taskmanager.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
