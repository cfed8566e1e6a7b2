"""Run the TMS server: python -m tms"""
import uvicorn

from tms.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "tms.main:create_application",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
