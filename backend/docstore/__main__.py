"""Run the docstore API with uvicorn: `python -m docstore` or `docstore`."""

import uvicorn

from docstore.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "docstore.main:app",
        host=settings.host,
        port=settings.port,
        proxy_headers=True,
        forwarded_allow_ips="*",
        log_config=None,
    )


if __name__ == "__main__":
    main()
