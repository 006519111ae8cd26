# src/shared/error_codes.py
# Central mapping that aligns with the API error contract.
# Keep keys stable: site front-ends rely on these.
ERROR_CODES = {
    # ─── Validation & Requests ──────────────────────────────────────────────
    "validation_error": {
        "http": 422,
        "message": "Validation failed for one or more fields."
    },
    "invalid_domain": {
        "http": 422,
        "message": "The supplied domain is not a valid hostname."
    },

    # ─── Tenancy ───────────────────────────────────────────────────────────
    "not_found": {
        "http": 404,
        "message": "Resource not found."
    },
    "route_not_available": {
        "http": 404,
        "message": "This page is not available on this site."
    },

    # ─── Server ────────────────────────────────────────────────────────────
    "service_unavailable": {
        "http": 503,
        "message": "A backing service is unavailable."
    },
    "internal_error": {
        "http": 500,
        "message": "An unexpected error occurred. Please try again later."
    },
}
