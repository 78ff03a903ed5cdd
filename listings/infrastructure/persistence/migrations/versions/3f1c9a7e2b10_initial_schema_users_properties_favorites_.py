"""Initial schema: users, properties, amenities, favorites, recommendations

Revision ID: 3f1c9a7e2b10
Revises:
Create Date: 2026-10-19 10:12:41.508213

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c9a7e2b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(with_updated: bool = True) -> list[sa.Column]:
    cols = [sa.Column("created_at", sa.DateTime(timezone=True), nullable=False)]
    if with_updated:
        cols.append(sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False))
    return cols


def upgrade() -> None:
    """Create initial schema."""
    op.create_table(
        "app_user",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("hashed_password", sa.String(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_app_user_email"), "app_user", ["email"], unique=True)
    op.create_index(op.f("ix_app_user_created_at"), "app_user", ["created_at"])

    op.create_table(
        "property",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("price", sa.Numeric(14, 2), nullable=False),
        sa.Column("address", sa.String(), nullable=False),
        sa.Column("city", sa.String(), nullable=False),
        sa.Column("state", sa.String(), nullable=False),
        sa.Column("zip_code", sa.String(), nullable=False),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("property_type", sa.String(), nullable=False),
        sa.Column("bedrooms", sa.Integer(), nullable=False),
        sa.Column("bathrooms", sa.Float(), nullable=False),
        sa.Column("area", sa.Float(), nullable=False),
        sa.Column("images", sa.JSON(), nullable=False),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("created_by", sa.String(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "property_type IN ('apartment', 'house', 'condo', 'townhouse', 'land', 'commercial')",
            name="property_type_check",
        ),
        sa.CheckConstraint(
            "status IN ('available', 'sold', 'pending')", name="property_status_check"
        ),
        sa.CheckConstraint("price >= 0", name="property_price_check"),
        sa.CheckConstraint(
            "bedrooms >= 0 AND bathrooms >= 0 AND area >= 0", name="property_size_check"
        ),
        sa.ForeignKeyConstraint(["created_by"], ["app_user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    for column in ("price", "property_type", "area", "status", "created_by", "created_at"):
        op.create_index(op.f(f"ix_property_{column}"), "property", [column])
    op.create_index("ix_property_city_state", "property", ["city", "state"])

    op.create_table(
        "property_amenity",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("property_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["property_id"], ["property.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("property_id", "name", name="uq_property_amenity"),
    )
    op.create_index("ix_property_amenity_name", "property_amenity", ["name"])

    op.create_table(
        "favorite",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("property_id", sa.String(), nullable=False),
        *_timestamps(with_updated=False),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["property_id"], ["property.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "property_id", name="uq_favorite_user_property"),
    )
    op.create_index(op.f("ix_favorite_property_id"), "favorite", ["property_id"])
    op.create_index(op.f("ix_favorite_created_at"), "favorite", ["created_at"])
    op.create_index("ix_favorite_user_created", "favorite", ["user_id", "created_at"])

    op.create_table(
        "recommendation",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("sender_id", sa.String(), nullable=False),
        sa.Column("recipient_id", sa.String(), nullable=False),
        sa.Column("property_id", sa.String(), nullable=False),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("status", sa.String(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'rejected')",
            name="recommendation_status_check",
        ),
        sa.ForeignKeyConstraint(["sender_id"], ["app_user.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["recipient_id"], ["app_user.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["property_id"], ["property.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "sender_id", "recipient_id", "property_id", name="uq_recommendation_triple"
        ),
    )
    for column in ("property_id", "status", "created_at"):
        op.create_index(op.f(f"ix_recommendation_{column}"), "recommendation", [column])
    op.create_index(
        "ix_recommendation_sender_created", "recommendation", ["sender_id", "created_at"]
    )
    op.create_index(
        "ix_recommendation_recipient_created",
        "recommendation",
        ["recipient_id", "created_at"],
    )


def downgrade() -> None:
    """Drop all tables (reverse dependency order)."""
    op.drop_table("recommendation")
    op.drop_table("favorite")
    op.drop_table("property_amenity")
    op.drop_table("property")
    op.drop_table("app_user")
