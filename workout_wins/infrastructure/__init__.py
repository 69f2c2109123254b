# Infrastructure Layer
# ====================
# Contains all external service integrations:
# - persistence/: star store interface, in-memory and SQLite backends
# - llm/: OpenRouter LLM weekly commentary
# - slack/: delivery of follow-up messages to Slack response URLs
# - config/: Environment and settings management
#
# This layer can be replaced entirely without affecting domain/application layers.
