"""
Run the server: `python -m versenotes` (or the `versenotes` console script).

Listens on HOST/PORT from the environment (defaults 0.0.0.0:3000).
"""

import uvicorn

from versenotes.config import settings


def main() -> None:
    uvicorn.run(
        "versenotes.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
