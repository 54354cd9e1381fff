"""
api/routes/v1/resources.py -- Protected mount points for bookings and translation.

The booking and translation services own their business logic; this module
only guarantees they sit behind the authentication gate. Each router carries
get_current_subject as a router-level dependency, so any handler added here
runs only after a token has been verified, and receives the subject id.
"""

from fastapi import APIRouter, Depends

from api.models import ProtectedResourceResponse
from auth.dependencies import get_current_subject

# Auth policy:
# - /api/v1/bookings/*:  requires auth -- router-level gate
# - /api/v1/translate/*: requires auth -- router-level gate
bookings_router = APIRouter(dependencies=[Depends(get_current_subject)])
translate_router = APIRouter(dependencies=[Depends(get_current_subject)])


@bookings_router.get("/bookings", response_model=ProtectedResourceResponse)
def bookings_root(subject_id: str = Depends(get_current_subject)) -> ProtectedResourceResponse:
    return ProtectedResourceResponse(resource="bookings", subject_id=subject_id)


@translate_router.post("/translate", response_model=ProtectedResourceResponse)
def translate_root(subject_id: str = Depends(get_current_subject)) -> ProtectedResourceResponse:
    return ProtectedResourceResponse(resource="translate", subject_id=subject_id)
