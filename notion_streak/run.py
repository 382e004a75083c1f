"""
Run the widget under uvicorn.

    python -m notion_streak.run
"""
import os

import uvicorn
from dotenv import load_dotenv


def main() -> None:
    if "PYTEST_CURRENT_TEST" not in os.environ:
        load_dotenv()

    from notion_streak.core.config import get_settings

    settings = get_settings()
    print(f"[INFO] Notion streak widget running on port {settings.PORT}")
    uvicorn.run(
        "notion_streak.main:create_app",
        factory=True,
        host=os.getenv("HOST", "0.0.0.0"),
        port=settings.PORT,
    )


if __name__ == "__main__":
    main()
