"""Service lookup for route handlers."""

from fastapi import Request

from angletrack.services.record_service import RecordService


def get_record_service(request: Request) -> RecordService:
    return request.app.state.records
