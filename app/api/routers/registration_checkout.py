from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response
from fastapi.concurrency import run_in_threadpool

from app.api.deps import get_registration_checkout_handler
from app.api.invocation import InvocationEvent, RegistrationCheckoutHandler


router = APIRouter()


# todos os verbos caem no handler para que nao-POST responda 405 em JSON
@router.api_route(
    "/v1/inscricao",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"],
)
async def registration_checkout(
    request: Request,
    handler: RegistrationCheckoutHandler = Depends(get_registration_checkout_handler),
):
    body = await request.body() if request.method == "POST" else None
    event = InvocationEvent(
        http_method=request.method,
        path=request.url.path,
        body=body,
    )
    result = await run_in_threadpool(handler.handle, event)
    return Response(
        content=result["body"],
        status_code=result["statusCode"],
        headers=result["headers"],
    )
