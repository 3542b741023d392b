"""Entrypoint: run the case-law ranker server."""

import uvicorn

from caselaw_ranker.api.app import create_app
from caselaw_ranker.config.settings import get_settings


def main() -> None:
    settings = get_settings()
    app = create_app()
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
