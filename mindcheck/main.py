import uvicorn

from mindcheck.core.app import create_app
from mindcheck.core.config import get_settings

app = create_app()


def run() -> None:
    """Entrypoint for `mindcheck-api` script."""
    settings = get_settings()
    uvicorn.run(
        "mindcheck.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        factory=False,
    )


if __name__ == "__main__":
    run()
