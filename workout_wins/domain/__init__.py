# Domain Layer
# ============
# The star tracking engine:
# - calendar:    DayKeys, Monday-start weeks and ISO week labels
# - aggregation: weekly totals, leaderboard and matrix
# - workflow:    recording a star and the confirm/cancel follow-up
# - rendering:   table and leaderboard text
# - star_store:  the StarStore interface; backends live in infrastructure
# - errors:      failures reported to the command router
