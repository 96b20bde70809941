# axion-stamp/gateway.py
# Purpose: Gateway agent handler that stamps agent-bound messages before delivery.
from __future__ import annotations

import asyncio
import inspect
import logging
import os
from typing import Any, Awaitable, Callable, Optional, Union

from config import GatewayConfig
from models.injections import InjectionModel
from models.options import TimestampInjectionOptions
from runtime.timestamp import TimestampInjector, timestamp_opts_from_config

logger = logging.getLogger(__name__)

InjectionCallback = Callable[[InjectionModel], Union[Awaitable[None], None]]


class AgentHandler:
    """Entry point for messages addressed to an agent context.

    Every message is stamped exactly once here; channel-envelope and
    scheduled-job messages pass through unchanged. Delivered messages are
    queued on ``inbox`` and handed to ``on_injection`` when set.
    """

    def __init__(
        self,
        config: Optional[GatewayConfig] = None,
        *,
        injector: Optional[TimestampInjector] = None,
        on_injection: Optional[InjectionCallback] = None,
        stamp_enabled: Optional[bool] = None,
    ):
        self.config = config or GatewayConfig()
        self.injector = injector or TimestampInjector()
        self.on_injection = on_injection
        if stamp_enabled is None:
            stamp_enabled = os.getenv("TIMESTAMP_INJECTION", "true").lower() == "true"
        self.stamp_enabled = stamp_enabled
        self.inbox: asyncio.Queue[InjectionModel] = asyncio.Queue()

    def timestamp_options(self) -> TimestampInjectionOptions:
        return timestamp_opts_from_config(self.config)

    def prepare(self, message: str, *, from_id: str = "user") -> InjectionModel:
        if not self.stamp_enabled:
            return InjectionModel(from_id=from_id, content=message)
        content = self.injector.inject(message, self.timestamp_options())
        return InjectionModel(from_id=from_id, content=content, stamped=content != message)

    async def handle(self, message: str, *, from_id: str = "user") -> InjectionModel:
        inj = self.prepare(message, from_id=from_id)
        logger.debug("Delivering message from %s (stamped=%s)", from_id, inj.stamped)
        await self.inbox.put(inj)
        if self.on_injection is not None:
            result = self.on_injection(inj)
            if inspect.isawaitable(result):
                await result
        return inj
