"""
Workout Wins - Web Server Entry Point
=====================================

Run this to start the Slack endpoints:
    python main.py

Then point the Slack app at:
    Slash command:  https://<host>/slack/workout
    Interactivity:  https://<host>/slack/interactions
"""

import logging

import uvicorn

from workout_wins.infrastructure.config import get_settings


def main():
    """Start the web server."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format='%(asctime)s - %(levelname)s - %(name)s - %(message)s'
    )

    print("\n" + "=" * 50)
    print("   Workout Wins - Slack Star Tracker")
    print("=" * 50)
    print(f"\n   Starting server at http://{settings.host}:{settings.port}")
    print("   Press Ctrl+C to stop\n")

    uvicorn.run(
        "workout_wins.web.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    main()
