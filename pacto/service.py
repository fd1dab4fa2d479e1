import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence, Union

from .catalog import FAVOR_TYPES, REWARD_TYPES, find_favor_type, find_reward_type
from .models import (
    Participant,
    FavorStatus,
    RedemptionStatus,
    Decision,
    FavorType,
    RewardType,
    FavorRecord,
    RedemptionRecord,
    Ledger,
    CatalogResponse,
    StatusResponse,
    AckResponse,
)
from .timegate import is_review_window, is_same_local_day

logger = logging.getLogger(__name__)

DAILY_REDEMPTION_LIMIT = 3
HISTORY_LIMIT = 50


class LedgerServiceError(Exception):
    pass


class InvalidParticipantError(LedgerServiceError):
    pass


class UnknownFavorTypeError(LedgerServiceError):
    pass


class UnknownRewardTypeError(LedgerServiceError):
    pass


class InvalidDecisionError(LedgerServiceError):
    pass


class RecordNotFoundError(LedgerServiceError):
    pass


class DailyRedemptionLimitExceededError(LedgerServiceError):
    pass


class InsufficientPointsError(LedgerServiceError):
    pass


class StorageUnavailableError(LedgerServiceError):
    pass


class InMemoryStorage:
    """Keeps the ledger in process memory; load and save hand out copies."""

    def __init__(self, ledger: Optional[Ledger] = None):
        self._ledger = ledger.model_copy(deep=True) if ledger is not None else Ledger()

    def load(self) -> Ledger:
        return self._ledger.model_copy(deep=True)

    def save(self, ledger: Ledger) -> None:
        self._ledger = ledger.model_copy(deep=True)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def earned_points(ledger: Ledger, participant: Participant) -> int:
    return sum(
        f.points for f in ledger.favors
        if f.user == participant and f.status == FavorStatus.APPROVED
    )


def spent_points(ledger: Ledger, participant: Participant) -> int:
    return sum(
        r.cost for r in ledger.redemptions
        if r.user == participant and r.status == RedemptionStatus.APPROVED
    )


def balance(ledger: Ledger, participant: Participant) -> int:
    return earned_points(ledger, participant) - spent_points(ledger, participant)


def redemptions_today(ledger: Ledger, participant: Participant, now: datetime) -> int:
    return sum(
        1 for r in ledger.redemptions
        if r.user == participant and is_same_local_day(r.timestamp, now)
    )


class LedgerService:
    def __init__(
        self,
        storage=None,
        clock: Optional[Callable[[], datetime]] = None,
        favor_types: Optional[Sequence[FavorType]] = None,
        reward_types: Optional[Sequence[RewardType]] = None,
    ):
        self.storage = storage or InMemoryStorage()
        self.clock = clock or _utcnow
        self.favor_types = tuple(favor_types) if favor_types is not None else FAVOR_TYPES
        self.reward_types = tuple(reward_types) if reward_types is not None else REWARD_TYPES

    def get_config(self) -> CatalogResponse:
        return CatalogResponse(favor_types=list(self.favor_types), reward_types=list(self.reward_types))

    def get_status(self, participant: Union[Participant, str]) -> StatusResponse:
        user = self._parse_participant(participant)
        other = user.other()
        now = self.clock()
        review = is_review_window(now)
        ledger = self.storage.load()

        earned = earned_points(ledger, user)
        spent = spent_points(ledger, user)

        return StatusResponse(
            user=user,
            review=review,
            my_points=earned - spent,
            other_points=balance(ledger, other),
            my_total_earned=earned,
            my_total_spent=spent,
            my_pending=[
                f for f in ledger.favors
                if f.user == user and f.status == FavorStatus.PENDING
            ],
            to_review=[
                f for f in ledger.favors
                if f.user == other and f.status == FavorStatus.PENDING
            ] if review else [],
            my_redemptions=[r for r in ledger.redemptions if r.user == user],
            pending_redemptions=[
                r for r in ledger.redemptions
                if r.user == other and r.status == RedemptionStatus.PENDING
            ],
            redemptions_today=redemptions_today(ledger, user, now),
            disputed=[f for f in ledger.favors if f.status == FavorStatus.DISPUTED],
            history=[f for f in ledger.favors if f.status != FavorStatus.PENDING][-HISTORY_LIMIT:],
        )

    def submit_favor(self, participant: Union[Participant, str], favor_type_id: str) -> AckResponse:
        user = self._parse_participant(participant)
        favor_type = find_favor_type(favor_type_id, self.favor_types)
        if favor_type is None:
            raise UnknownFavorTypeError(f"Unknown favor type {favor_type_id!r}")

        ledger = self.storage.load()
        record = FavorRecord(
            id=ledger.next_id(),
            user=user,
            favor_type_id=favor_type.id,
            favor_name=favor_type.name,
            points=favor_type.points,
            timestamp=self.clock(),
            status=FavorStatus.PENDING,
        )
        ledger.favors.append(record)
        self.storage.save(ledger)

        logger.info("Favor %d (%s, %d pts) submitted by %s", record.id, favor_type.id, favor_type.points, user.value)
        return AckResponse()

    def review_favor(
        self,
        reviewer: Union[Participant, str],
        record_id: int,
        decision: Union[Decision, str],
    ) -> AckResponse:
        user = self._parse_participant(reviewer)
        try:
            decision = Decision(decision)
        except ValueError:
            raise InvalidDecisionError(f"Invalid decision {decision!r}, expected approve or reject")

        ledger = self.storage.load()
        record = next(
            (
                f for f in ledger.favors
                if f.id == record_id and f.user == user.other() and f.status == FavorStatus.PENDING
            ),
            None,
        )
        if record is None:
            logger.warning("Favor %s not reviewable by %s", record_id, user.value)
            raise RecordNotFoundError(f"Favor {record_id} not found")

        # Rejected favors go to outside mediation instead of being closed here.
        record.status = FavorStatus.APPROVED if decision == Decision.APPROVE else FavorStatus.DISPUTED
        self.storage.save(ledger)

        logger.info("Favor %d %s by %s", record.id, record.status.value, user.value)
        return AckResponse(status=record.status.value)

    def submit_redemption(self, participant: Union[Participant, str], reward_type_id: str) -> AckResponse:
        user = self._parse_participant(participant)
        reward_type = find_reward_type(reward_type_id, self.reward_types)
        if reward_type is None:
            raise UnknownRewardTypeError(f"Unknown reward type {reward_type_id!r}")

        now = self.clock()
        ledger = self.storage.load()

        if redemptions_today(ledger, user, now) >= DAILY_REDEMPTION_LIMIT:
            logger.warning("Daily redemption limit reached for %s", user.value)
            raise DailyRedemptionLimitExceededError(
                f"Maximum of {DAILY_REDEMPTION_LIMIT} redemptions per day reached"
            )

        available = balance(ledger, user)
        if available < reward_type.cost:
            logger.warning("%s has %d points, %s costs %d", user.value, available, reward_type.id, reward_type.cost)
            raise InsufficientPointsError(
                f"Insufficient points: {available} available, {reward_type.cost} required"
            )

        record = RedemptionRecord(
            id=ledger.next_id(),
            user=user,
            reward_type_id=reward_type.id,
            reward_name=reward_type.name,
            cost=reward_type.cost,
            timestamp=now,
            status=RedemptionStatus.PENDING,
        )
        ledger.redemptions.append(record)
        self.storage.save(ledger)

        logger.info("Redemption %d (%s, %d pts) requested by %s", record.id, reward_type.id, reward_type.cost, user.value)
        return AckResponse()

    def review_redemption(
        self,
        reviewer: Union[Participant, str],
        record_id: int,
        decision: Union[Decision, str],
    ) -> AckResponse:
        user = self._parse_participant(reviewer)

        ledger = self.storage.load()
        record = next(
            (
                r for r in ledger.redemptions
                if r.id == record_id and r.user == user.other() and r.status == RedemptionStatus.PENDING
            ),
            None,
        )
        if record is None:
            logger.warning("Redemption %s not reviewable by %s", record_id, user.value)
            raise RecordNotFoundError(f"Redemption {record_id} not found")

        record.status = RedemptionStatus.APPROVED if decision == Decision.APPROVE else RedemptionStatus.REJECTED
        self.storage.save(ledger)

        logger.info("Redemption %d %s by %s", record.id, record.status.value, user.value)
        return AckResponse(status=record.status.value)

    def _parse_participant(self, value: Union[Participant, str]) -> Participant:
        try:
            return Participant(value)
        except ValueError:
            raise InvalidParticipantError(f"Invalid user {value!r}")
