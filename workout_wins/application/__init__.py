# Application Layer
# =================
# Turns inbound slash commands and button clicks into calls on the star
# engine, and the engine's results into Slack responses. No business rules.
