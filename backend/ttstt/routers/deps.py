from fastapi import HTTPException, Request

from ..errors import TtsttError


def get_state(request: Request):
    return request.app.state.ttstt


def get_pair_store(request: Request):
    return request.app.state.pair_store


def get_vendor_adapters(request: Request):
    return request.app.state.vendor_adapters


def http_error(e: TtsttError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.detail)
