from dataclasses import dataclass


@dataclass(frozen=True)
class LeagueBotError:
    message: str


@dataclass(frozen=True)
class NotFoundError(LeagueBotError):
    subject: str
    name: str


@dataclass(frozen=True)
class PermissionDeniedError(LeagueBotError):
    actor: str
    verb: str


@dataclass(frozen=True)
class MalformedUpdateError(LeagueBotError):
    kind: str
