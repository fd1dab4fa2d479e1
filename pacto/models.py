from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class Participant(str, Enum):
    MARCOS = "marcos"
    SOFI = "sofi"

    def other(self) -> "Participant":
        return Participant.SOFI if self is Participant.MARCOS else Participant.MARCOS


class FavorStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    DISPUTED = "disputed"


class RedemptionStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Decision(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"


class FavorType(BaseModel):
    id: str
    name: str
    points: int = Field(..., ge=1, le=3)

    model_config = ConfigDict(frozen=True)


class RewardType(BaseModel):
    id: str
    name: str
    cost: int = Field(..., ge=1, le=3)

    model_config = ConfigDict(frozen=True)


class FavorRecord(BaseModel):
    id: int
    user: Participant
    favor_type_id: str = Field(..., alias="gestoId")
    favor_name: str = Field(default="", alias="gestoName")
    points: int
    timestamp: datetime
    status: FavorStatus = FavorStatus.PENDING

    model_config = ConfigDict(populate_by_name=True)


class RedemptionRecord(BaseModel):
    id: int
    user: Participant
    reward_type_id: str = Field(..., alias="canjeId")
    reward_name: str = Field(default="", alias="canjeName")
    cost: int
    timestamp: datetime
    status: RedemptionStatus = RedemptionStatus.PENDING

    model_config = ConfigDict(populate_by_name=True)


class Ledger(BaseModel):
    """The whole persisted document: id counter plus both record sequences."""

    counter: int = 0
    favors: list[FavorRecord] = Field(default_factory=list, alias="gestos")
    redemptions: list[RedemptionRecord] = Field(default_factory=list, alias="canjes")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def next_id(self) -> int:
        self.counter += 1
        return self.counter


class SubmitFavorRequest(BaseModel):
    user: str = ""
    favor_type_id: str = Field(default="", alias="gestoId")

    model_config = ConfigDict(populate_by_name=True, json_schema_extra={
        "example": {"user": "marcos", "gestoId": "foto"}
    })


class ReviewFavorRequest(BaseModel):
    user: str = ""
    record_id: int = Field(default=0, alias="gestoDbId")
    action: str = ""

    model_config = ConfigDict(populate_by_name=True, json_schema_extra={
        "example": {"user": "sofi", "gestoDbId": 1, "action": "approve"}
    })


class SubmitRedemptionRequest(BaseModel):
    user: str = ""
    reward_type_id: str = Field(default="", alias="canjeId")

    model_config = ConfigDict(populate_by_name=True, json_schema_extra={
        "example": {"user": "marcos", "canjeId": "alarma"}
    })


class ReviewRedemptionRequest(BaseModel):
    user: str = ""
    record_id: int = Field(default=0, alias="canjeDbId")
    action: str = ""

    model_config = ConfigDict(populate_by_name=True, json_schema_extra={
        "example": {"user": "sofi", "canjeDbId": 2, "action": "approve"}
    })


class CatalogResponse(BaseModel):
    favor_types: list[FavorType] = Field(..., alias="gestos")
    reward_types: list[RewardType] = Field(..., alias="canjes")

    model_config = ConfigDict(populate_by_name=True)


class StatusResponse(BaseModel):
    user: Participant
    review: bool
    my_points: int = Field(..., alias="myPoints")
    other_points: int = Field(..., alias="otherPoints")
    my_total_earned: int = Field(..., alias="myTotalEarned")
    my_total_spent: int = Field(..., alias="myTotalSpent")
    my_pending: list[FavorRecord] = Field(..., alias="myPending")
    to_review: list[FavorRecord] = Field(..., alias="toReview")
    my_redemptions: list[RedemptionRecord] = Field(..., alias="myCanjes")
    pending_redemptions: list[RedemptionRecord] = Field(..., alias="pendingCanjes")
    redemptions_today: int = Field(..., alias="canjesToday")
    disputed: list[FavorRecord]
    history: list[FavorRecord]

    model_config = ConfigDict(populate_by_name=True)


class AckResponse(BaseModel):
    ok: bool = True
    status: Optional[str] = None
