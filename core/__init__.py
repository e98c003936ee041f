# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the activity-tracking business logic:
# - models/: Pydantic schemas for intervals and API payloads
# - services/: Recorder and daily aggregator
#
# Routing and HTTP concerns live in app/; services only raise the
# exceptions defined in app/exceptions.py.
# =============================================================================
