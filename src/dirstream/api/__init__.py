# dirstream HTTP API layer
# Created: 2026-10-19
#
# Versioned endpoints live under /api/v1/; /api/ carries the same routes as the
# path existing clients call.
