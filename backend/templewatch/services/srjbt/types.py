"""
Typed definitions for booking API responses.

Summary endpoints list which dates have inventory; detail endpoints list the slots for one date.
Darshan and aarti share the summary shape; their detail records differ only in field names.
"""

from typing import TypedDict


class SummaryResponse(TypedDict, total=False):
    """GET /eDarshan/darshansummary/{templeId} and GET /eAarti/aartiSummary."""
    availableDatesList: list[str]  # e.g. ["2026-10-18", "2026-10-19"]
    startAndEndDates: list[str]  # [start, end], e.g. ["18-Oct-2026", "16-Nov-2026"]
    blockedDates: list[str]  # same key format as availableDatesList
    bookedDates: list[str]
    minCount: str
    maxCount: str


class DarshanSlotRecord(TypedDict, total=False):
    darshanDate: str  # e.g. "18-Oct-2026"
    slotId: int
    slotName: str
    noOfTicketsAvailable: int
    slotBeginTime: str
    slotEndTime: str
    reportingTime: str


class AartiSlotRecord(TypedDict, total=False):
    aartiDate: str
    slotId: int
    slotName: str
    noOfTicketsAvailable: int
    slotBeginTime: str
    slotEndTime: str
    reportingStartTime: str
    reportingEndTime: str


class DarshanDetailResponse(TypedDict, total=False):
    """GET /eDarshan/darshanAvailability/{date}/{templeId}."""
    darshanSlots: list[DarshanSlotRecord] | None
    minPersons: int
    maxPersons: int
    darshanPrice: float | None
    flag: str


class AartiDetailResponse(TypedDict, total=False):
    """GET /eAarti/aartiAvailability/{date}."""
    aartiSlots: list[AartiSlotRecord] | None
    minPersons: int
    maxPersons: int
    aartiPrice: float | None
    flag: str


class SendOtpResponse(TypedDict, total=False):
    """POST /account/resendOtp."""
    userId: str
    statusMessage: str
    actionMsg: str


class ValidateOtpResponse(TypedDict, total=False):
    """POST /account/validateOtp. The token normally arrives in the tof-auth-token response header."""
    loginSuccess: bool
    statusMessage: str
    authToken: str
    authTokenPresent: bool


# Detail record keys per kind
SLOTS_KEY = {"darshan": "darshanSlots", "aarti": "aartiSlots"}
PRICE_KEY = {"darshan": "darshanPrice", "aarti": "aartiPrice"}
