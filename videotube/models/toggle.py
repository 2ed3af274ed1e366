"""토글 관계 모델 — 좋아요와 구독을 하나의 테이블로 표현.

Toggle relation model — Likes and subscriptions share one table.
A row means "on" (liked / subscribed); no row means "off".
"""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from videotube.database import Base


class ToggleKind(str, enum.Enum):
    """토글 대상 유형 (Kind of toggle target)."""

    VIDEO = "video"  # 동영상 좋아요 (Video like)
    COMMENT = "comment"  # 댓글 좋아요 (Comment like)
    TWEET = "tweet"  # 트윗 좋아요 (Tweet like)
    CHANNEL = "channel"  # 채널 구독 (Channel subscription, target is a user)


class ToggleRelation(Base):
    """토글 관계 테이블.

    Toggle relation between an actor and a target. Rows are created on
    toggle-on and deleted on toggle-off, never updated. target_id has no
    foreign key because it points into a different table per kind.

    Attributes:
        id: 고유 식별자 (Primary key UUID)
        actor_id: 좋아요/구독한 사용자 (User who liked / subscribed)
        target_id: 대상 ID (Video, comment, tweet or channel user id)
        target_kind: 대상 유형 (ToggleKind value)
        created_at: 생성 일시 (Creation timestamp)

    Constraints:
        uq_toggle_actor_target_kind: (actor, target, kind) 당 최대 1행
                                     (At most one row per actor/target/kind)
    """

    __tablename__ = "toggle_relations"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    actor_id: Mapped[uuid.UUID] = mapped_column(Uuid, index=True, nullable=False)
    target_id: Mapped[uuid.UUID] = mapped_column(Uuid, index=True, nullable=False)
    target_kind: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    __table_args__ = (
        UniqueConstraint(
            "actor_id", "target_id", "target_kind", name="uq_toggle_actor_target_kind"
        ),
    )
