"""Run the assessment form service with uvicorn."""

import uvicorn

from assessment_forms.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "assessment_forms.app:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development and settings.debug,
        log_level=settings.logging.level.lower(),
    )


if __name__ == "__main__":
    main()
