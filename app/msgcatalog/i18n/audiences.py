"""Audiences and the collaborators that talk to them.

An audience is who a message is resolved for. It is a closed set of
variants, dispatched on ``kind``:

- ``ConsoleAudience``: the operator console
- ``UserAudience``: an identified user
- ``UnidentifiedAudience``: anything else (automation, unknown senders)

The remaining types describe the host-provided collaborators: where
messages are delivered, who is currently connected and who holds which
permission.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable, ClassVar, Iterable, Optional, Union


class AudienceKind(str, Enum):
    """Audience variant tags."""

    CONSOLE = "console"
    USER = "user"
    UNIDENTIFIED = "unidentified"


@dataclass(frozen=True)
class ConsoleAudience:
    """The operator console."""

    kind: ClassVar[AudienceKind] = AudienceKind.CONSOLE


@dataclass(frozen=True)
class UserAudience:
    """An identified user.

    Attributes:
        user_id: Stable user identity, used as the locale cache key.
        cached_locale: Locale reported with the audience itself; used when
            the locale cache has no entry for this user.
    """

    kind: ClassVar[AudienceKind] = AudienceKind.USER

    user_id: str
    cached_locale: Optional[str] = None


@dataclass(frozen=True)
class UnidentifiedAudience:
    """An audience with no console or user identity."""

    kind: ClassVar[AudienceKind] = AudienceKind.UNIDENTIFIED

    name: Optional[str] = None


Audience = Union[ConsoleAudience, UserAudience, UnidentifiedAudience]

CONSOLE = ConsoleAudience()

# (message) -> message; placeholder substitution
Replacer = Callable[[str], str]

# (message) -> message; color/markup rendering
Colorizer = Callable[[str], str]

# (audience, permission) -> allowed
PermissionCheck = Callable[[Audience, str], bool]


class MessageSink(ABC):
    """Delivers a finished message to an audience."""

    @abstractmethod
    def send(self, audience: Audience, message: str) -> None:
        """Deliver message to audience.

        Args:
            audience: Recipient.
            message: Final, substituted and colorized text.
        """
        pass


class AudienceDirectory(ABC):
    """Lists the audiences currently connected to the host."""

    @abstractmethod
    def online_audiences(self) -> Iterable[Audience]:
        """Return the audiences a broadcast should consider."""
        pass
