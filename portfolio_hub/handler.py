"""
AWS Lambda entrypoint for Portfolio Hub

HTTP events from API Gateway or a function URL are adapted to the ASGI
app with Mangum. The app (and with it the database engine and response
cache) is built once per Lambda execution environment.
"""

import logging
from typing import Any, Dict, Optional

from mangum import Mangum

from portfolio_hub.main import app

logger = logging.getLogger(__name__)

asgi_handler = Mangum(app, lifespan="auto")


def lambda_handler(event: Optional[Dict[str, Any]], context: Any) -> Dict[str, Any]:
    """
    AWS Lambda entrypoint.

    Scheduled warm-up pings ({"source": "warmup"}) return immediately so
    they keep the environment alive without touching upstream providers.
    Every other event is treated as an HTTP request.
    """
    event = event or {}
    if event.get("source") == "warmup":
        logger.info("Lambda warm-up ping")
        return {"statusCode": 200, "body": "warm"}

    return asgi_handler(event, context)
