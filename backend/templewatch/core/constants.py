"""
Centralized constants for the poll job, auth headers and notification formatting.

Change header names, job ids or caps here instead of scattering literals across routes and services.
"""

# Scheduler job id (must match the id used in main.py add_job)
SLOT_POLL_JOB_ID = "slot_poll"

# Header the booking API reads the bearer token from (and returns it on OTP login)
UPSTREAM_TOKEN_HEADER = "tof-auth-token"
# Headers our own API accepts a caller-supplied token on
CLIENT_TOKEN_HEADER = "x-auth-token"

# Browser cookie that mirrors the active token
TOKEN_COOKIE_NAME = "auth_token"
TOKEN_COOKIE_MAX_AGE_DAYS = 30

# Notification preview: list at most this many slots per changed date
NOTIFY_PREVIEW_SLOTS = 3

# OTP request defaults used by the booking site's login dialog
OTP_TYPE_RESEND = "Resend"
