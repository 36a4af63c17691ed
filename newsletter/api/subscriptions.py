import logging
from typing import Annotated

import logfire
from fastapi import APIRouter, Depends, Form, Request, Response

from newsletter.core.exceptions import SubscriptionPersistenceError
from newsletter.core.service_dependencies import get_subscription_service
from newsletter.core.telemetry import get_logger, get_request_id
from newsletter.schemas.subscription import SubscriptionForm
from newsletter.services.subscription_service import SubscriptionService

router = APIRouter(tags=["subscriptions"])


@router.post(
    "/subscriptions",
    summary="Subscribe to the newsletter",
    responses={
        200: {"description": "Subscription recorded"},
        400: {"description": "Missing or malformed form data"},
        500: {"description": "Subscription could not be saved"},
    },
)
async def subscribe(
    request: Request,
    form: Annotated[SubscriptionForm, Form()],
    subscription_service: SubscriptionService = Depends(get_subscription_service),
    logger: logging.Logger = Depends(get_logger),
):
    request_id = get_request_id(request)
    with logfire.span(
        "Adding a new subscriber",
        request_id=request_id,
        subscriber_email=form.email,
        subscriber_name=form.name,
    ):
        logger.info(
            f"request_id {request_id} - Adding '{form.email}' '{form.name}' as a new subscriber."
        )
        try:
            await subscription_service.subscribe(form)
        except SubscriptionPersistenceError as e:
            logger.error(f"request_id {request_id} - {e.message}")
            return Response(status_code=500)

        logger.info(f"request_id {request_id} - New subscriber details have been saved")
        return Response(status_code=200)
