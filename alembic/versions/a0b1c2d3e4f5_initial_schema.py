"""initial_schema

Revision ID: a0b1c2d3e4f5
Revises:
Create Date: 2026-10-17 09:00:00.000000

초기 스키마 생성: users, videos, comments, tweets, playlists, playlist_videos,
watch_history, toggle_relations.
Create the initial schema for users, media, engagement and playlists.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID


# revision identifiers, used by Alembic.
revision: str = 'a0b1c2d3e4f5'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # users — 사용자 계정이자 채널 (User accounts, also channels)
    op.create_table(
        'users',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('avatar', sa.String(1024), nullable=True),
        sa.Column('cover_image', sa.String(1024), nullable=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('refresh_token', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('email', name='uq_users_email'),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)
    op.create_index('ix_users_full_name', 'users', ['full_name'])

    # videos — 동영상 (media files are URLs in the external store)
    op.create_table(
        'videos',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('owner_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('video_file', sa.String(1024), nullable=False),
        sa.Column('thumbnail', sa.String(1024), nullable=False),
        sa.Column('duration', sa.Float(), server_default='0', nullable=False),
        sa.Column('views', sa.Integer(), server_default='0', nullable=False),
        sa.Column('is_published', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_videos_owner_id', 'videos', ['owner_id'])

    # comments — 동영상 댓글 (Comments on videos)
    op.create_table(
        'comments',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('content', sa.String(3000), nullable=False),
        sa.Column('video_id', UUID(as_uuid=True), sa.ForeignKey('videos.id', ondelete='CASCADE'), nullable=False),
        sa.Column('owner_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_comments_video_id', 'comments', ['video_id'])

    # tweets — 채널 커뮤니티 게시글 (Community posts)
    op.create_table(
        'tweets',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('content', sa.String(3000), nullable=False),
        sa.Column('owner_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_tweets_owner_id', 'tweets', ['owner_id'])

    # playlists — 재생목록, 소유자별 이름 고유 (Name unique per owner)
    op.create_table(
        'playlists',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.String(300), nullable=True),
        sa.Column('owner_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('is_private', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('owner_id', 'name', name='uq_playlist_owner_name'),
    )

    # playlist_videos — 재생목록 항목, 정수 키가 추가 순서 (Integer key keeps insertion order)
    op.create_table(
        'playlist_videos',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('playlist_id', UUID(as_uuid=True), sa.ForeignKey('playlists.id', ondelete='CASCADE'), nullable=False),
        sa.Column('video_id', UUID(as_uuid=True), sa.ForeignKey('videos.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('playlist_id', 'video_id', name='uq_playlist_video'),
    )

    # watch_history — 시청 기록, 정수 키가 시청 순서 (Integer key keeps watch order)
    op.create_table(
        'watch_history',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('video_id', UUID(as_uuid=True), sa.ForeignKey('videos.id', ondelete='CASCADE'), nullable=False),
        sa.Column('watched_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_watch_history_user_id', 'watch_history', ['user_id'])

    # toggle_relations — 좋아요/구독 관계, (actor, target, kind) 당 1행
    # Likes and subscriptions; at most one row per actor/target/kind
    op.create_table(
        'toggle_relations',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('actor_id', UUID(as_uuid=True), nullable=False),
        sa.Column('target_id', UUID(as_uuid=True), nullable=False),
        sa.Column('target_kind', sa.String(20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('actor_id', 'target_id', 'target_kind', name='uq_toggle_actor_target_kind'),
    )
    op.create_index('ix_toggle_relations_actor_id', 'toggle_relations', ['actor_id'])
    op.create_index('ix_toggle_relations_target_id', 'toggle_relations', ['target_id'])


def downgrade() -> None:
    op.drop_index('ix_toggle_relations_target_id', table_name='toggle_relations')
    op.drop_index('ix_toggle_relations_actor_id', table_name='toggle_relations')
    op.drop_table('toggle_relations')
    op.drop_index('ix_watch_history_user_id', table_name='watch_history')
    op.drop_table('watch_history')
    op.drop_table('playlist_videos')
    op.drop_table('playlists')
    op.drop_index('ix_tweets_owner_id', table_name='tweets')
    op.drop_table('tweets')
    op.drop_index('ix_comments_video_id', table_name='comments')
    op.drop_table('comments')
    op.drop_index('ix_videos_owner_id', table_name='videos')
    op.drop_table('videos')
    op.drop_index('ix_users_full_name', table_name='users')
    op.drop_index('ix_users_username', table_name='users')
    op.drop_table('users')
