"""Message formatting, delivery and broadcast.

Turns (audience, key) into a final string: resolve the audience's catalog,
resolve the key through the catalog chain, apply the caller's substitution,
then colorize. Any data problem degrades to an empty message; only caller
mistakes raise.
"""

import re
from typing import Any, Dict, Optional

from msgcatalog.i18n.audiences import (
    Audience,
    AudienceDirectory,
    Colorizer,
    MessageSink,
    PermissionCheck,
    Replacer,
)
from msgcatalog.i18n.resolvers import AudienceResolver
from msgcatalog.logging import get_module_logger

logger = get_module_logger()

# Matches {{name}} or {name}
_PLACEHOLDER_PATTERN = re.compile(r"\{\{(\w+)\}\}|\{(\w+)\}")


def interpolation_replacer(variables: Dict[str, Any]) -> Replacer:
    """Build a Replacer that fills {{name}} and {name} placeholders.

    Args:
        variables: Dict of variable name -> value.

    Returns:
        Callable applying the substitution to a message.

    Example:
        replacer = interpolation_replacer({"player": "Steve"})
        replacer("Welcome, {player}!")  # "Welcome, Steve!"
    """

    def substitute(match: "re.Match[str]") -> str:
        var_name = match.group(1) or match.group(2)
        if var_name not in variables:
            raise ValueError(f"Missing interpolation variable: {var_name}")
        return str(variables[var_name])

    def replace(message: str) -> str:
        # Single pass so substituted values are never scanned again
        return _PLACEHOLDER_PATTERN.sub(substitute, message)

    return replace


class Translator:
    """Formats and delivers catalog messages for audiences.

    Attributes:
        resolver: AudienceResolver choosing each audience's catalog.
        colorizer: Color/markup renderer applied when color is requested.
        sink: Delivery target for send_message and broadcast_message.
        directory: Source of connected audiences for broadcast_message.
        permission_check: Capability check used to filter broadcasts.
    """

    def __init__(
        self,
        resolver: AudienceResolver,
        colorizer: Optional[Colorizer] = None,
        sink: Optional[MessageSink] = None,
        directory: Optional[AudienceDirectory] = None,
        permission_check: Optional[PermissionCheck] = None,
    ):
        self.resolver = resolver
        self.colorizer = colorizer
        self.sink = sink
        self.directory = directory
        self.permission_check = permission_check

    def resolve_message(
        self,
        audience: Optional[Audience],
        key: str,
        replacer: Optional[Replacer] = None,
        color: bool = False,
    ) -> str:
        """Resolve a message for an audience.

        Args:
            audience: Audience the message is for; None means unknown.
            key: Message key.
            replacer: Optional placeholder substitution applied before color.
            color: Whether to apply the colorizer.

        Returns:
            Final message, or "" when no catalog or translation is available.

        Raises:
            ValueError: If key is empty.
        """
        if not key:
            raise ValueError("key must not be empty")

        catalog = self.resolver.resolve(audience)
        if catalog is None:
            logger.warning("no_catalog_available", key=key)
            return ""

        message = catalog.resolve(key)
        if not message:
            return ""

        try:
            if replacer is not None:
                message = replacer(message)
            if color and self.colorizer is not None:
                message = self.colorizer(message)
        except Exception:  # pylint: disable=broad-except
            logger.exception(
                "message_formatting_failed",
                key=key,
                catalog=catalog.code,
            )
            return ""

        return message

    def send_message(
        self,
        audience: Audience,
        key: str,
        replacer: Optional[Replacer] = None,
        color: bool = False,
    ) -> bool:
        """Resolve a message and deliver it to the audience.

        Empty messages are not delivered.

        Returns:
            True if a message was handed to the sink.

        Raises:
            ValueError: If audience is None or key is empty.
            RuntimeError: If no sink is configured.
        """
        if audience is None:
            raise ValueError("audience must not be None")
        if self.sink is None:
            raise RuntimeError("No message sink configured")

        message = self.resolve_message(audience, key, replacer, color)
        if not message:
            return False

        self.sink.send(audience, message)
        return True

    def broadcast_message(
        self,
        key: str,
        replacer: Optional[Replacer] = None,
        color: bool = False,
        permission: Optional[str] = None,
    ) -> int:
        """Send a message to every connected audience.

        Each audience is resolved independently, so recipients with
        different locales get their own translation. When permission is
        given, only audiences passing the permission check receive it.
        A delivery or permission-check failure for one audience is logged
        and that audience is skipped.

        Args:
            key: Message key.
            replacer: Optional placeholder substitution.
            color: Whether to apply the colorizer.
            permission: Required permission, if any.

        Returns:
            Number of audiences the message was delivered to.

        Raises:
            ValueError: If key is empty.
            RuntimeError: If no audience directory or sink is configured.
        """
        if not key:
            raise ValueError("key must not be empty")
        if self.directory is None:
            raise RuntimeError("No audience directory configured")
        if self.sink is None:
            raise RuntimeError("No message sink configured")

        delivered = 0
        for audience in self.directory.online_audiences():
            try:
                if permission and not self._has_permission(audience, permission):
                    continue
                if self.send_message(audience, key, replacer, color):
                    delivered += 1
            except Exception:  # pylint: disable=broad-except
                logger.exception(
                    "broadcast_delivery_failed",
                    key=key,
                    audience_kind=getattr(audience, "kind", None),
                )

        logger.debug(
            "broadcast_completed",
            key=key,
            permission=permission,
            delivered=delivered,
        )
        return delivered

    def _has_permission(self, audience: Audience, permission: str) -> bool:
        if self.permission_check is None:
            logger.warning("permission_check_missing", permission=permission)
            return False
        return self.permission_check(audience, permission)
