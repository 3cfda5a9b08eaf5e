"""Observability configuration using Logfire.

Services open a span per operation and emit structured events inside it:

    import logfire

    with logfire.span("vote_service.cast_vote", post_id=str(post_id)):
        logfire.info("Vote cast", total_votes=post.total_votes)
"""

from typing import Any

import logfire
from sqlalchemy.ext.asyncio import AsyncEngine

from concensor.config import Settings


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for observability.

    Telemetry goes to Logfire cloud only when explicitly enabled or when a
    token is configured; otherwise spans are printed to the console.

    Args:
        settings: Application settings
    """
    obs = settings.observability
    send_to_logfire = (
        obs.send_to_logfire
        if obs.send_to_logfire is not None
        else bool(obs.logfire_token)
    )

    config_kwargs: dict[str, Any] = {
        "service_name": "concensor-engine",
        "service_version": "0.1.0",
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }

    if obs.logfire_token:
        config_kwargs["token"] = obs.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
        has_token=bool(obs.logfire_token),
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace every statement the engine runs under the active Logfire span.

    Row locks taken by the vote and points paths show up as nested spans.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        enable_commenter=True,
    )
    logfire.info("SQLAlchemy instrumented")
