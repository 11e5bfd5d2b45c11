"""Booking eligibility rules.

Decides whether a user may book a class session and, when not, lists every
reason. Rules are a plain ordered table of (name, predicate, message)
entries: all of them run, each violation appends its message, and the
reasons keep the table order.
"""

import math
import os
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Protocol, Sequence
from uuid import UUID

from lessonbook.core.errors import NotFoundError
from lessonbook.core.logging import get_logger
from lessonbook.models import Booking, ClassSession, Profile
from lessonbook.utils.datetime import hours_between, now_utc, to_naive_utc

logger = get_logger(__name__)

MAX_ACTIVE_BOOKINGS = int(os.getenv("MAX_ACTIVE_BOOKINGS", "2"))
MINIMUM_HOURS_NOTICE = float(os.getenv("MINIMUM_HOURS_NOTICE", "24"))


class SessionStore(Protocol):
    async def get_by_id(self, session_id: UUID) -> ClassSession | None: ...


class BookingStore(Protocol):
    async def list_active_for_user(self, user_id: UUID) -> list[Booking]: ...


class ProfileStore(Protocol):
    async def get_by_user_id(self, user_id: UUID) -> Profile | None: ...


@dataclass(frozen=True)
class EligibilityContext:
    """Everything a rule may look at, read once per evaluation."""

    session: ClassSession
    active_bookings: Sequence[Booking]
    profile: Profile | None
    now: datetime

    @property
    def points(self) -> int:
        # Missing profile means a zero balance, not an error
        return self.profile.points if self.profile is not None else 0

    @property
    def starts_at(self) -> datetime:
        return to_naive_utc(self.session.scheduled_at)

    @property
    def ends_at(self) -> datetime:
        return self.starts_at + timedelta(minutes=self.session.duration)

    @property
    def hours_until_start(self) -> float:
        return hours_between(self.now, self.starts_at)


@dataclass(frozen=True)
class EligibilityRule:
    name: str
    violated: Callable[[EligibilityContext], bool]
    message: Callable[[EligibilityContext], str]


def default_rules(
    max_active_bookings: int = MAX_ACTIVE_BOOKINGS,
    minimum_hours_notice: float = MINIMUM_HOURS_NOTICE,
) -> tuple[EligibilityRule, ...]:
    """The booking rule table, in reason order."""
    notice_label = f"{minimum_hours_notice:g}"

    return (
        EligibilityRule(
            name="already_booked",
            violated=lambda ctx: any(
                b.session_id == ctx.session.id for b in ctx.active_bookings
            ),
            message=lambda ctx: "Already booked this session",
        ),
        EligibilityRule(
            name="active_booking_cap",
            violated=lambda ctx: len(ctx.active_bookings) >= max_active_bookings,
            message=lambda ctx: f"Maximum active bookings reached ({max_active_bookings})",
        ),
        EligibilityRule(
            name="capacity",
            violated=lambda ctx: ctx.session.is_full,
            message=lambda ctx: "Session is full",
        ),
        EligibilityRule(
            name="points",
            violated=lambda ctx: ctx.session.points_required > 0
            and (ctx.profile is None or ctx.profile.points < ctx.session.points_required),
            message=lambda ctx: (
                f"Insufficient points (need {ctx.session.points_required}, have {ctx.points})"
            ),
        ),
        EligibilityRule(
            name="already_started",
            violated=lambda ctx: ctx.now >= ctx.ends_at,
            message=lambda ctx: "Session has already started",
        ),
        EligibilityRule(
            # Past sessions have non-positive hours and never trip this one
            name="advance_notice",
            violated=lambda ctx: 0 < ctx.hours_until_start <= minimum_hours_notice,
            message=lambda ctx: (
                f"Sessions must be booked at least {notice_label} hours in advance. "
                f"This session starts in {math.floor(ctx.hours_until_start)} hours."
            ),
        ),
        EligibilityRule(
            name="inactive",
            violated=lambda ctx: not ctx.session.is_active,
            message=lambda ctx: "Session is not active",
        ),
    )


@dataclass(frozen=True)
class SessionSummary:
    id: UUID
    title: str
    points_required: int
    spots_available: int


@dataclass(frozen=True)
class UserSummary:
    points: int
    active_bookings: int


@dataclass(frozen=True)
class EligibilityResult:
    """Read-only snapshot of one eligibility check. Never persisted."""

    can_book: bool
    reasons: tuple[str, ...]
    session: SessionSummary
    user: UserSummary
    violated_rules: tuple[str, ...] = ()

    def to_payload(self) -> dict[str, Any]:
        return {
            "can_book": self.can_book,
            "reasons": list(self.reasons),
            "session": {
                "id": self.session.id,
                "title": self.session.title,
                "points_required": self.session.points_required,
                "spots_available": self.session.spots_available,
            },
            "user": {
                "points": self.user.points,
                "active_bookings": self.user.active_bookings,
            },
        }


class BookingEligibilityEvaluator:
    """Advises whether a booking may be created. Reads only, reserves nothing."""

    def __init__(
        self,
        sessions: SessionStore,
        bookings: BookingStore,
        profiles: ProfileStore,
        rules: Sequence[EligibilityRule] | None = None,
        clock: Callable[[], datetime] = now_utc,
    ):
        self.sessions = sessions
        self.bookings = bookings
        self.profiles = profiles
        self.rules = tuple(rules) if rules is not None else default_rules()
        self.clock = clock

    async def evaluate(self, session_id: UUID, user_id: UUID) -> EligibilityResult:
        """
        Check every booking rule for (session, user).

        Raises:
            NotFoundError: the session does not exist. Every other problem
                is reported in ``reasons``.
        """
        session = await self.sessions.get_by_id(session_id)
        if session is None:
            raise NotFoundError("ClassSession", str(session_id))

        # Independent reads; one AsyncSession can't run them concurrently
        active_bookings = await self.bookings.list_active_for_user(user_id)
        profile = await self.profiles.get_by_user_id(user_id)

        context = EligibilityContext(
            session=session,
            active_bookings=tuple(active_bookings),
            profile=profile,
            now=to_naive_utc(self.clock()),
        )

        violated = [rule for rule in self.rules if rule.violated(context)]

        result = EligibilityResult(
            can_book=not violated,
            reasons=tuple(rule.message(context) for rule in violated),
            session=SessionSummary(
                id=session.id,
                title=session.title,
                points_required=session.points_required,
                spots_available=session.spots_available,
            ),
            user=UserSummary(
                points=context.points,
                active_bookings=len(context.active_bookings),
            ),
            violated_rules=tuple(rule.name for rule in violated),
        )

        logger.info(
            "booking.eligibility_evaluated",
            session_id=str(session_id),
            user_id=str(user_id),
            can_book=result.can_book,
            violated_rules=list(result.violated_rules),
        )
        return result
