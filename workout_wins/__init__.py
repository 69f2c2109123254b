# Workout Wins - Slack Workout Star Tracker
# ========================================
# A slash-command bot for logging daily workout stars, using Layered Architecture:
#
# ARCHITECTURE LAYERS:
# - Presentation:   FastAPI endpoints for slash commands and button actions
# - Application:    Command parsing and routing (no business rules)
# - Domain:         Star engine: calendar, aggregation, workflow, rendering
# - Infrastructure: External services (star store, LLM, Slack response URLs)
#
# This design allows easy replacement of infrastructure components
# (e.g., swap SQLite for another store, or OpenRouter for another LLM).

__version__ = "0.1.0"
