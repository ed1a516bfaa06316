"""
Action Dispatch
===============

Fire-and-forget hand-off of recommended retention actions to the
downstream workflow system. Success or failure comes back as a boolean
and a log line; nothing is retried or awaited.

Usage:
    from health_engine.common import ActionDispatcher

    dispatcher = ActionDispatcher(handler=send_to_crm)
    ok = dispatcher.dispatch("retention-email", "C-1001")
"""

from typing import Callable, List, Optional, Tuple

from loguru import logger

ActionHandler = Callable[[str, str], object]


class ActionDispatcher:
    """
    Invokes a workflow handler with `(action_name, customer_id)`.

    Without a handler, actions are only logged and recorded in `sent`.
    A handler signals failure by raising or by returning False.
    """

    def __init__(self, handler: Optional[ActionHandler] = None):
        self.handler = handler
        self.sent: List[Tuple[str, str]] = []
        logger.info("ActionDispatcher initialized")

    def dispatch(self, action: str, customer_id: str) -> bool:
        if self.handler is None:
            logger.info(f"Action '{action}' queued for customer {customer_id}")
            self.sent.append((action, customer_id))
            return True

        try:
            result = self.handler(action, customer_id)
        except Exception as e:
            logger.warning(f"Dispatch of '{action}' for {customer_id} failed: {e}")
            return False

        if result is False:
            logger.warning(f"Dispatch of '{action}' for {customer_id} was rejected")
            return False

        logger.info(f"Dispatched '{action}' for customer {customer_id}")
        self.sent.append((action, customer_id))
        return True
